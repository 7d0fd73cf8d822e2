"""Track of the Day service: cached current track and the daily post."""

import sys
from datetime import date
from typing import Any, Dict, Optional

from totd_bot.adapters.discord.presentation import track_message
from totd_bot.adapters.storage.json_store import TotdCache
from totd_bot.domain.models import CacheRecord
from totd_bot.ports.outbound import MessagingPort, TrackDataPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class TotdService:
    def __init__(self, tracks: TrackDataPort, cache: TotdCache):
        self._tracks = tracks
        self._cache = cache

    async def _fetch_record(self) -> CacheRecord:
        track = await self._tracks.track_of_the_day()
        return CacheRecord(end_timestamp=int(track["endTimestamp"]), payload=track)

    async def current(self) -> Dict[str, Any]:
        """Today's track, served from the cache while it is still valid."""
        record = await self._cache.get_fresh(self._fetch_record)
        return record.payload

    async def for_day(self, day: date) -> Dict[str, Any]:
        """A past day's track, always fetched (never cached)."""
        return await self._tracks.track_of_the_day(day)

    async def post_daily(self, messenger: MessagingPort, endpoint: str) -> None:
        track = await self.current()
        await messenger.send_post(endpoint, track_message(track))
        _log(f"[TotdService] posted {track.get('name', '?')} to {endpoint}")

    async def warm_up(self) -> Optional[Dict[str, Any]]:
        """Refresh the cache at startup; failures are logged, not raised."""
        try:
            track = await self.current()
        except Exception as e:
            _log(f"[TotdService] cache warm-up failed: {e}")
            return None
        _log(f"[TotdService] current track: {track.get('name', '?')} ({track.get('date', '?')})")
        return track
