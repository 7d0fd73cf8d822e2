"""Configuration loaded from the environment."""

__version__ = "0.1.0"

import os
from dataclasses import dataclass, field
from datetime import date

from dotenv import load_dotenv

load_dotenv()

DISCORD_API_BASE = "https://discord.com/api/v10"

# First Track of the Day was published on this date.
EPOCH_START = date(2020, 7, 1)

# Fixed depth used by the "last page" leaderboard button.
LEADERBOARD_MAX_PAGE = 1000
LEADERBOARD_PAGE_SIZE = 25


@dataclass(frozen=True)
class NadeoConfig:
    live_token: str = ""
    core_token: str = ""
    meet_token: str = ""
    user_agent: str = "totd-bot / discord interactions"

    @property
    def is_configured(self) -> bool:
        return bool(self.live_token and self.core_token)


@dataclass(frozen=True)
class AppConfig:
    """Immutable settings shared by the router, scheduler and adapters."""

    port: int = 3000
    app_id: str = ""
    discord_token: str = ""
    discord_api_base: str = DISCORD_API_BASE
    totd_channel_id: str = ""
    totd_cache_path: str = "totd.json"
    totd_schedule: str = "0 13 * * *"
    timezone: str = "UTC"
    tucker_user_id: str = "203284058673774592"
    epoch_start: date = EPOCH_START
    leaderboard_max_page: int = LEADERBOARD_MAX_PAGE
    leaderboard_page_size: int = LEADERBOARD_PAGE_SIZE
    nadeo: NadeoConfig = field(default_factory=NadeoConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=int(os.getenv("PORT", "3000")),
            app_id=os.getenv("APP_ID", ""),
            discord_token=os.getenv("DISCORD_TOKEN", ""),
            discord_api_base=os.getenv("DISCORD_API_BASE", DISCORD_API_BASE).rstrip("/"),
            totd_channel_id=os.getenv("TOTD_CHANNEL_ID", ""),
            totd_cache_path=os.getenv("TOTD_CACHE_PATH", "totd.json"),
            totd_schedule=os.getenv("TOTD_SCHEDULE", "0 13 * * *"),
            timezone=os.getenv("TOTD_TIMEZONE", "UTC"),
            tucker_user_id=os.getenv("TUCKER_USER_ID", "203284058673774592"),
            nadeo=NadeoConfig(
                live_token=os.getenv("NADEO_LIVE_TOKEN", ""),
                core_token=os.getenv("NADEO_CORE_TOKEN", ""),
                meet_token=os.getenv("NADEO_MEET_TOKEN", ""),
                user_agent=os.getenv("TRACKMANIA_USER_AGENT", "totd-bot / discord interactions"),
            ),
        )

    def webhook_endpoint(self, token: str) -> str:
        """Address of the original response for an interaction token."""
        return f"webhooks/{self.app_id}/{token}/messages/@original"

    def totd_channel_endpoint(self) -> str:
        return f"channels/{self.totd_channel_id}/messages"
