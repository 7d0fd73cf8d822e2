"""Inbound port: one interaction delivered by the chat platform."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import discord


@dataclass
class CommandOption:
    """One node of a slash command's option tree."""

    name: str
    value: Any = None
    options: List["CommandOption"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CommandOption":
        return cls(
            name=str(raw.get("name", "")),
            value=raw.get("value"),
            options=[cls.from_dict(o) for o in raw.get("options") or [] if isinstance(o, dict)],
        )

    def find(self, name: str) -> Optional["CommandOption"]:
        for option in self.options:
            if option.name == name:
                return option
        return None


@dataclass
class SourceMessage:
    """The message a component belongs to (read-only context)."""

    id: str
    channel_id: str
    embeds: List[Dict[str, Any]] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SourceMessage":
        return cls(
            id=str(raw.get("id", "")),
            channel_id=str(raw.get("channel_id", "")),
            embeds=[e for e in raw.get("embeds") or [] if isinstance(e, dict)],
            raw=raw,
        )

    @property
    def endpoint(self) -> str:
        return f"channels/{self.channel_id}/messages/{self.id}"

    def embed_author(self) -> str:
        """Author name shown in the first embed ("" when absent)."""
        if not self.embeds:
            return ""
        author = self.embeds[0].get("author") or {}
        return str(author.get("name", ""))


@dataclass
class Interaction:
    """Platform-agnostic view of an inbound interaction payload."""

    type: discord.InteractionType
    token: str = ""
    id: str = ""
    command_name: Optional[str] = None
    options: List[CommandOption] = field(default_factory=list)
    component_id: Optional[str] = None
    selected_values: List[str] = field(default_factory=list)
    source_message: Optional[SourceMessage] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Interaction":
        """Build an Interaction from the raw JSON body.

        Raises ValueError for interaction types this bot does not serve.
        """
        kind = discord.InteractionType(int(payload.get("type", 0)))
        if kind not in (
            discord.InteractionType.ping,
            discord.InteractionType.application_command,
            discord.InteractionType.component,
        ):
            raise ValueError(f"unsupported interaction type: {kind.name}")

        data = payload.get("data") or {}
        message = payload.get("message")
        interaction = cls(
            type=kind,
            token=str(payload.get("token") or ""),
            id=str(payload.get("id") or ""),
            source_message=SourceMessage.from_dict(message) if isinstance(message, dict) else None,
        )
        if kind is discord.InteractionType.application_command:
            interaction.command_name = str(data.get("name", ""))
            interaction.options = [
                CommandOption.from_dict(o) for o in data.get("options") or [] if isinstance(o, dict)
            ]
        elif kind is discord.InteractionType.component:
            interaction.component_id = str(data.get("custom_id", ""))
            interaction.selected_values = [str(v) for v in data.get("values") or []]
        return interaction

    def first_option(self) -> Optional[CommandOption]:
        return self.options[0] if self.options else None
