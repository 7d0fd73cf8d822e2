"""Domain data models: pure Python dataclasses."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CacheRecord:
    """Persisted Track of the Day. The payload belongs to the data provider."""

    end_timestamp: int
    payload: Dict[str, Any] = field(default_factory=dict)

    def is_stale(self, now: float) -> bool:
        return self.end_timestamp < now

    def to_dict(self) -> dict:
        return {"endTimestamp": self.end_timestamp, "payload": self.payload}

    @classmethod
    def from_dict(cls, raw: dict) -> "CacheRecord":
        if not isinstance(raw, dict) or "endTimestamp" not in raw:
            raise ValueError(f"not a cache record: {raw!r}")
        payload = raw.get("payload")
        return cls(
            end_timestamp=int(raw["endTimestamp"]),
            payload=payload if isinstance(payload, dict) else {},
        )


@dataclass(frozen=True)
class TrackRef:
    """Enough of a track to address its leaderboard."""

    author: str
    group_uid: str
    map_uid: str


@dataclass(frozen=True)
class LeaderboardQuery:
    group_uid: str
    map_uid: str
    cursor: Optional[int] = None  # offset into the leaderboard; None = top
    extra: Optional[str] = None  # page length chosen from the page select
