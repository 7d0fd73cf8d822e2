"""Message bodies sent to Discord (embeds and components)."""

from typing import Any, Dict, List, Optional

import discord

from totd_bot.domain.custom_id import ControlAction, encode
from totd_bot.domain.models import TrackRef

ERROR_COLOR = 0xFF0000
TRACK_COLOR = 0x0099FF
LEADERBOARD_COLOR = 0x00B37A

_ACTION_ROW = discord.ComponentType.action_row.value
_BUTTON = discord.ComponentType.button.value
_SELECT = discord.ComponentType.string_select.value
_MAX_SELECT_OPTIONS = 25

EPHEMERAL = discord.MessageFlags(ephemeral=True).value


def format_time(ms: Optional[int]) -> str:
    """Race time in milliseconds -> ``m:ss.mmm``."""
    if ms is None:
        return "-"
    ms = int(ms)
    minutes, rest = divmod(ms, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{minutes}:{seconds:02d}.{millis:03d}"


def _button(label: str, custom_id: str, style: discord.ButtonStyle = discord.ButtonStyle.primary) -> dict:
    return {"type": _BUTTON, "style": style.value, "label": label, "custom_id": custom_id}


def _link(label: str, url: str) -> dict:
    return {"type": _BUTTON, "style": discord.ButtonStyle.link.value, "label": label, "url": url}


def _row(*components: dict) -> dict:
    return {"type": _ACTION_ROW, "components": list(components)}


def track_message(track: Dict[str, Any]) -> Dict[str, Any]:
    embed = discord.Embed(
        title=track.get("name") or track.get("mapUid", "Unknown track"),
        description=track.get("label") or None,
        color=TRACK_COLOR,
    )
    embed.set_author(name=track.get("author") or "unknown")
    for medal in ("author", "gold", "silver", "bronze"):
        embed.add_field(name=medal.capitalize(), value=format_time(track.get(f"{medal}Score")), inline=True)
    if track.get("thumbnailUrl"):
        embed.set_thumbnail(url=track["thumbnailUrl"])
    if track.get("date"):
        embed.set_footer(text=track["date"])

    components = []
    if track.get("groupUid") and track.get("mapUid"):
        ids = [track["groupUid"], track["mapUid"]]
        # TOTD tracks carry their date so the leaderboard can link back to them.
        if track.get("date"):
            ids.append(track["date"])
        components.append(_row(
            _button("Leaderboard", encode(ControlAction.LEADERBOARD_FIRST, ids)),
        ))
    return {"content": "", "embeds": [embed.to_dict()], "components": components}


def _page_options(offset: int, page_size: int, max_page: int) -> List[dict]:
    first = max(0, offset - page_size * (_MAX_SELECT_OPTIONS // 2))
    options = []
    for start in range(first, max_page, page_size):
        if len(options) >= _MAX_SELECT_OPTIONS:
            break
        options.append({
            "label": f"Positions {start + 1}-{min(start + page_size, max_page)}",
            "value": f"{start};{page_size}",
            "default": start == offset,
        })
    return options


def leaderboard_message(
    track: TrackRef,
    board: Dict[str, Any],
    page_size: int,
    max_page: int,
    totd_date: Optional[str] = None,
) -> Dict[str, Any]:
    offset = int(board.get("offset") or 0)
    records = board.get("records") or []
    lines = [
        f"`#{r.get('position', '?')}` {r.get('name') or r.get('accountId', '?')} - {format_time(r.get('score'))}"
        for r in records
    ]
    embed = discord.Embed(
        title=board.get("title") or "Leaderboard",
        description="\n".join(lines) or "No records on this page.",
        color=LEADERBOARD_COLOR,
    )
    # The author name is read back when a leaderboard control is pressed.
    embed.set_author(name=track.author or "unknown")
    embed.set_footer(text=f"{track.map_uid} | offset {offset}")

    ids = [track.group_uid, track.map_uid]
    if totd_date:
        ids.append(totd_date)
        track_control = encode(ControlAction.TRACK, ["totd", track.map_uid, track.group_uid, totd_date])
    else:
        track_control = encode(ControlAction.TRACK, ["map", track.map_uid, track.group_uid])
    return {
        "content": "",
        "embeds": [embed.to_dict()],
        "components": [
            _row(
                _button("First", encode(ControlAction.LEADERBOARD_FIRST, ids)),
                _button("Last", encode(ControlAction.LEADERBOARD_LAST, ids, [str(page_size)])),
                _button("Track", track_control, discord.ButtonStyle.secondary),
            ),
            _row({
                "type": _SELECT,
                "custom_id": encode(ControlAction.LEADERBOARD_PAGE, ids),
                "placeholder": "Jump to page",
                "options": _page_options(offset, page_size, max_page),
            }),
        ],
    }


def cup_message(cup: Dict[str, Any]) -> Dict[str, Any]:
    embed = discord.Embed(title=cup.get("name") or "Cup of the Day", color=TRACK_COLOR)
    if cup.get("startTimestamp"):
        embed.add_field(name="Starts", value=f"<t:{int(cup['startTimestamp'])}:F>", inline=True)
    if cup.get("endTimestamp"):
        embed.add_field(name="Ends", value=f"<t:{int(cup['endTimestamp'])}:F>", inline=True)
    if cup.get("edition") is not None:
        embed.set_footer(text=f"Edition {cup['edition']}")
    return {"content": "", "embeds": [embed.to_dict()], "components": []}


def demo_message() -> Dict[str, Any]:
    embed = discord.Embed(title="hello world", description="example embed", color=39423)
    embed.add_field(name="field name", value="field value\nfield value", inline=False)
    embed.set_author(name="Brungus", url="https://github.com/Khujou/trackmania-bot")
    embed.set_footer(text="bungus")
    return {
        "content": "hello world",
        "embeds": [embed.to_dict()],
        "components": [_row(
            _button("test", encode(ControlAction.TEST)),
            _link("Click for win", "https://raw.githubusercontent.com/2qar/bigheadgeorge.github.io/master/ogdog.gif"),
            _link("Click for lose", "https://media.tenor.com/FDxMOf3iWhIAAAAM/angry-cute-cat-cat.gif"),
        )],
    }


def error_message(reason: str) -> Dict[str, Any]:
    embed = discord.Embed(title="Error: Unable to handle request", color=ERROR_COLOR)
    embed.add_field(name="Reason", value=reason[:1024] or "unknown error", inline=False)
    return {
        "flags": EPHEMERAL,
        "embeds": [embed.to_dict()],
        "components": [_row(_button("Back", "back"))],
    }


def ephemeral_reply(content: str) -> Dict[str, Any]:
    return {"content": content, "flags": EPHEMERAL}
