"""Daily trigger: parses a fixed-time cron expression and computes fire times.

Pure domain logic, no framework dependencies.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# "<minute> <hour> * * *": the only cron shape a daily job needs.
_DAILY_CRON_RE = re.compile(r"^(\d{1,2})\s+(\d{1,2})\s+\*\s+\*\s+\*$")


@dataclass(frozen=True)
class DailyTrigger:
    hour: int
    minute: int
    tz: str = "UTC"

    @classmethod
    def from_cron(cls, expression: str, tz: str = "UTC") -> "DailyTrigger":
        m = _DAILY_CRON_RE.match(expression.strip())
        if not m:
            raise ValueError(
                f"unsupported cron expression: {expression!r} (expected 'M H * * *')"
            )
        minute, hour = int(m.group(1)), int(m.group(2))
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"invalid time in cron expression: {expression!r}")
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, KeyError):
            raise ValueError(f"invalid timezone: {tz!r}")
        return cls(hour=hour, minute=minute, tz=tz)

    @property
    def cron_expression(self) -> str:
        return f"{self.minute} {self.hour} * * *"

    def next_after(self, moment: datetime) -> datetime:
        """First fire time strictly after ``moment`` (timezone-aware)."""
        local = moment.astimezone(ZoneInfo(self.tz))
        candidate = local.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate <= local:
            # Same tzinfo, so this is wall-clock arithmetic across DST.
            candidate = candidate + timedelta(days=1)
        return candidate
