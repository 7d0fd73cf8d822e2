"""Track of the Day: Discord interactions bot for Trackmania."""

from totd_bot.config import AppConfig, __version__

__all__ = ["AppConfig", "__version__"]
