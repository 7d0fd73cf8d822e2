"""Leaderboard pagination: turns a decoded control into a leaderboard query."""

from typing import Optional, Sequence

from totd_bot.config import LEADERBOARD_MAX_PAGE
from totd_bot.domain.custom_id import FIELD_SEP, ControlAction, ControlState
from totd_bot.domain.models import LeaderboardQuery


class PaginationResolver:
    """Resolves first / last / jump-to-page leaderboard controls.

    The "last page" is measured from a fixed ceiling (``max_page``), not
    from the live leaderboard length.
    """

    def __init__(self, max_page: int = LEADERBOARD_MAX_PAGE):
        self._max_page = max_page

    def resolve(
        self,
        state: ControlState,
        selected_values: Optional[Sequence[str]] = None,
    ) -> LeaderboardQuery:
        if not state.action.is_leaderboard:
            raise ValueError(f"not a leaderboard control: {state.raw!r}")

        group_uid = state.arg(0)
        map_uid = state.arg(1)

        if state.action is ControlAction.LEADERBOARD_FIRST:
            return LeaderboardQuery(group_uid, map_uid)

        if state.action is ControlAction.LEADERBOARD_LAST:
            if not state.qualifiers:
                raise ValueError(f"last-page control carries no count: {state.raw!r}")
            count = _parse_int(state.qualifiers[0], "count")
            return LeaderboardQuery(group_uid, map_uid, cursor=self._max_page - count)

        # LEADERBOARD_PAGE: the select's value is itself a ';'-joined field list.
        if not selected_values:
            raise ValueError("page select submitted without a value")
        extra_fields = selected_values[0].split(FIELD_SEP)
        cursor = _parse_int(extra_fields[0], "offset")
        extra = extra_fields[1] if len(extra_fields) > 1 and extra_fields[1] else None
        return LeaderboardQuery(group_uid, map_uid, cursor=cursor, extra=extra)


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"invalid leaderboard {name}: {value!r}")
