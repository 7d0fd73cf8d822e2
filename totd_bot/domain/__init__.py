"""Domain layer: pure Python, no framework dependencies."""

from totd_bot.domain.custom_id import ControlAction, ControlState, decode, encode
from totd_bot.domain.models import CacheRecord, LeaderboardQuery, TrackRef
from totd_bot.domain.pagination import PaginationResolver
from totd_bot.domain.schedule import DailyTrigger

__all__ = [
    "ControlAction",
    "ControlState",
    "decode",
    "encode",
    "CacheRecord",
    "LeaderboardQuery",
    "TrackRef",
    "PaginationResolver",
    "DailyTrigger",
]
