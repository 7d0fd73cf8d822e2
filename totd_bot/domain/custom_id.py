"""Control identifier codec: state carried inside component custom_ids.

Wire format: ``<tag>;<arg>;<arg>...``. The leaderboard family packs its
sub-kind and qualifiers into the tag with ``_``: ``lb_f``, ``lb_l_25``,
``lb_p``. Pure domain logic, no framework dependencies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple

FIELD_SEP = ";"
TAG_SEP = "_"

LEADERBOARD_TAG = "lb"


class ControlAction(Enum):
    TEST = "test"
    CUP_OF_THE_DAY = "cotd"
    LEADERBOARD_FIRST = "lb_f"
    LEADERBOARD_LAST = "lb_l"
    LEADERBOARD_PAGE = "lb_p"
    TRACK = "track"
    UNRECOGNIZED = ""

    @property
    def is_leaderboard(self) -> bool:
        return self in _LEADERBOARD_ACTIONS


_LEADERBOARD_ACTIONS = frozenset({
    ControlAction.LEADERBOARD_FIRST,
    ControlAction.LEADERBOARD_LAST,
    ControlAction.LEADERBOARD_PAGE,
})

_LEADERBOARD_SUBKINDS = {
    "f": ControlAction.LEADERBOARD_FIRST,
    "l": ControlAction.LEADERBOARD_LAST,
    "p": ControlAction.LEADERBOARD_PAGE,
}

_PLAIN_TAGS = {
    ControlAction.TEST.value: ControlAction.TEST,
    ControlAction.CUP_OF_THE_DAY.value: ControlAction.CUP_OF_THE_DAY,
    ControlAction.TRACK.value: ControlAction.TRACK,
}


@dataclass(frozen=True)
class ControlState:
    """Decoded meaning of a component custom_id."""

    action: ControlAction
    args: Tuple[str, ...] = ()
    qualifiers: Tuple[str, ...] = ()  # extra tag fields, leaderboard family only
    raw: str = field(default="", compare=False)

    @property
    def recognized(self) -> bool:
        return self.action is not ControlAction.UNRECOGNIZED

    def arg(self, index: int) -> str:
        """Return a positional arg or raise ValueError naming the missing field."""
        if index >= len(self.args):
            raise ValueError(
                f"control {self.action.value!r} is missing field #{index + 1}: {self.raw!r}"
            )
        return self.args[index]


def encode(action: ControlAction, args: Iterable[str] = (), qualifiers: Iterable[str] = ()) -> str:
    """Serialize a control state into a custom_id string."""
    if action is ControlAction.UNRECOGNIZED:
        raise ValueError("cannot encode an unrecognized control")

    args = [str(a) for a in args]
    qualifiers = [str(q) for q in qualifiers]

    for value in args:
        if FIELD_SEP in value:
            raise ValueError(f"field contains reserved {FIELD_SEP!r}: {value!r}")
    if qualifiers and not action.is_leaderboard:
        raise ValueError(f"{action.value!r} controls do not take qualifiers")
    for value in qualifiers:
        if not value or FIELD_SEP in value or TAG_SEP in value:
            raise ValueError(f"invalid qualifier: {value!r}")

    head = TAG_SEP.join([action.value, *qualifiers])
    return FIELD_SEP.join([head, *args])


def decode(custom_id: str) -> ControlState:
    """Parse a custom_id. Never raises; unknown input maps to UNRECOGNIZED."""
    custom_id = custom_id or ""
    fields = custom_id.split(FIELD_SEP)
    head, args = fields[0], tuple(fields[1:])

    if not head:
        return ControlState(ControlAction.UNRECOGNIZED, args, raw=custom_id)

    if head in _PLAIN_TAGS:
        return ControlState(_PLAIN_TAGS[head], args, raw=custom_id)

    parts = head.split(TAG_SEP)
    if parts[0] == LEADERBOARD_TAG and len(parts) >= 2:
        action = _LEADERBOARD_SUBKINDS.get(parts[1])
        qualifiers = tuple(parts[2:])
        if action is not None and all(qualifiers):
            return ControlState(action, args, qualifiers, raw=custom_id)

    return ControlState(ControlAction.UNRECOGNIZED, args, raw=custom_id)
