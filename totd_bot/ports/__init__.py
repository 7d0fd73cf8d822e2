"""Port interfaces (Hexagonal Architecture)."""

from totd_bot.ports.inbound import CommandOption, Interaction, SourceMessage
from totd_bot.ports.outbound import MessagingPort, TrackDataPort

__all__ = [
    "CommandOption",
    "Interaction",
    "SourceMessage",
    "MessagingPort",
    "TrackDataPort",
]
