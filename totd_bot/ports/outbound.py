"""Outbound ports: interfaces for external system adapters."""

from datetime import date
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from totd_bot.domain.models import TrackRef


@runtime_checkable
class MessagingPort(Protocol):
    """Chat platform REST capability (message bodies are JSON objects)."""

    async def send_patch(self, endpoint: str, body: Dict[str, Any]) -> Any: ...
    async def send_post(self, endpoint: str, body: Dict[str, Any]) -> Any: ...


@runtime_checkable
class TrackDataPort(Protocol):
    """Racing-game data provider. Results are plain JSON-like dicts."""

    async def track_of_the_day(self, day: Optional[date] = None) -> Dict[str, Any]: ...

    async def get_track_info(
        self, label: str, map_uid: str, extra: Optional[str] = None,
    ) -> Dict[str, Any]: ...

    async def leaderboard(
        self,
        track: TrackRef,
        cursor: Optional[int] = None,
        reverse: bool = True,
        extra: Optional[str] = None,
    ) -> Dict[str, Any]: ...

    async def cup_of_the_day(self) -> Dict[str, Any]: ...
