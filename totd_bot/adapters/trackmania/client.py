"""Trackmania (Nadeo services) client using aiohttp: implements TrackDataPort."""

import sys
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import aiohttp
from zoneinfo import ZoneInfo

from totd_bot.config import LEADERBOARD_PAGE_SIZE, NadeoConfig
from totd_bot.domain.models import TrackRef

LIVE_API_BASE = "https://live-services.trackmania.nadeo.live/api/token"
CORE_API_BASE = "https://prod.trackmania.core.nadeo.online"
MEET_API_BASE = "https://meet.trackmania.nadeo.club/api"

# Nadeo caps a single leaderboard request at 100 entries.
_MAX_LEADERBOARD_LENGTH = 100


def _log(msg: str):
    print(msg, file=sys.stderr)


class TrackmaniaAPIError(RuntimeError):
    pass


class TrackmaniaClient:
    """Async client for the TOTD calendar, map info, leaderboards and COTD."""

    def __init__(
        self,
        config: NadeoConfig,
        page_size: int = LEADERBOARD_PAGE_SIZE,
        tz: str = "UTC",
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._config = config
        self._page_size = page_size
        self._tz = ZoneInfo(tz)
        self._clock = clock

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    async def _get(self, url: str, token: str, params: Optional[dict] = None) -> Any:
        headers = {
            "Authorization": f"nadeo_v1 t={token}",
            "User-Agent": self._config.user_agent,
        }
        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=params, headers=headers) as resp:
                if resp.status >= 400:
                    raise TrackmaniaAPIError(f"{url} -> {resp.status}: {await resp.text()}")
                return await resp.json()

    async def _map_info(self, map_uid: str) -> Dict[str, Any]:
        data = await self._get(
            f"{CORE_API_BASE}/maps/", self._config.core_token, {"mapUidList": map_uid},
        )
        if not isinstance(data, list) or not data:
            raise TrackmaniaAPIError(f"map not found: {map_uid}")
        return data[0]

    @staticmethod
    def _track_dict(info: Dict[str, Any], label: str, group_uid: str) -> Dict[str, Any]:
        return {
            "label": label,
            "name": info.get("name", ""),
            "mapUid": info.get("mapUid", ""),
            "groupUid": group_uid,
            "author": info.get("authorDisplayName") or info.get("author", ""),
            "thumbnailUrl": info.get("thumbnailUrl", ""),
            "authorScore": info.get("authorScore"),
            "goldScore": info.get("goldScore"),
            "silverScore": info.get("silverScore"),
            "bronzeScore": info.get("bronzeScore"),
        }

    async def track_of_the_day(self, day: Optional[date] = None) -> Dict[str, Any]:
        """TOTD for ``day`` (today when omitted), including its validity window.

        "Today" is the calendar date in the configured timezone, the same
        date the router clamps past requests to.
        """
        now = self._clock().astimezone(self._tz)
        target = day or now.date()
        month_offset = (now.year - target.year) * 12 + (now.month - target.month)
        if month_offset < 0:
            raise TrackmaniaAPIError(f"no Track of the Day for {target.isoformat()} yet")
        data = await self._get(
            f"{LIVE_API_BASE}/campaign/month",
            self._config.live_token,
            {"length": 1, "offset": month_offset},
        )
        try:
            days: List[dict] = data["monthList"][0]["days"]
        except (KeyError, IndexError, TypeError):
            raise TrackmaniaAPIError(f"unexpected TOTD calendar response: {data!r}")

        if day is None:
            stamp = now.timestamp()
            entry = next(
                (d for d in days if d.get("startTimestamp", 0) <= stamp < d.get("endTimestamp", 0)),
                None,
            )
            if entry is None:
                # Before today's release the newest published day is still current.
                published = [d for d in days if d.get("mapUid")]
                entry = published[-1] if published else None
        else:
            entry = next((d for d in days if d.get("monthDay") == target.day), None)
        if entry is None or not entry.get("mapUid"):
            raise TrackmaniaAPIError(f"no Track of the Day for {target.isoformat()}")

        released = datetime.fromtimestamp(entry["startTimestamp"], tz=timezone.utc).date()
        track = self._track_dict(
            await self._map_info(entry["mapUid"]),
            label=f"Track of the Day - {released.isoformat()}",
            group_uid=entry.get("seasonUid", ""),
        )
        track.update({
            "date": released.isoformat(),
            "startTimestamp": int(entry["startTimestamp"]),
            "endTimestamp": int(entry["endTimestamp"]),
        })
        return track

    async def get_track_info(self, label: str, map_uid: str, extra: Optional[str] = None) -> Dict[str, Any]:
        """Map info for any track; ``extra`` is the leaderboard group uid."""
        return self._track_dict(
            await self._map_info(map_uid), label=label, group_uid=extra or "Personal_Best",
        )

    async def leaderboard(
        self,
        track: TrackRef,
        cursor: Optional[int] = None,
        reverse: bool = True,
        extra: Optional[str] = None,
    ) -> Dict[str, Any]:
        """One page of the world leaderboard. ``extra`` overrides the page length.

        Scores are race times, so ``reverse`` (ascending score) lists the
        fastest records first; ``reverse=False`` lists the page slowest first.
        """
        length = int(extra) if extra else self._page_size
        length = max(1, min(length, _MAX_LEADERBOARD_LENGTH))
        offset = max(0, cursor or 0)
        data = await self._get(
            f"{LIVE_API_BASE}/leaderboard/group/{track.group_uid}/map/{track.map_uid}/top",
            self._config.live_token,
            {"length": length, "offset": offset, "onlyWorld": "true"},
        )
        try:
            top = data["tops"][0]["top"]
        except (KeyError, IndexError, TypeError):
            raise TrackmaniaAPIError(f"unexpected leaderboard response: {data!r}")
        _log(f"[Trackmania] leaderboard {track.map_uid} offset={offset} -> {len(top)} record(s)")
        records = [
            {
                "position": r.get("position"),
                "accountId": r.get("accountId"),
                "name": r.get("displayName"),
                "score": r.get("score"),
            }
            for r in top
        ]
        records.sort(key=lambda r: r["position"] or 0, reverse=not reverse)
        return {"offset": offset, "length": length, "records": records}

    async def cup_of_the_day(self) -> Dict[str, Any]:
        data = await self._get(
            f"{MEET_API_BASE}/cup-of-the-day/current",
            self._config.meet_token or self._config.live_token,
        )
        if not isinstance(data, dict) or not data:
            raise TrackmaniaAPIError("no Cup of the Day is currently scheduled")
        competition = data.get("competition") or {}
        return {
            "name": competition.get("name") or "Cup of the Day",
            "edition": data.get("edition"),
            "startTimestamp": data.get("startDate"),
            "endTimestamp": data.get("endDate"),
        }
