"""Slash command catalogue and global registration."""

import sys
from typing import Any, Dict, List

import discord

from totd_bot.adapters.discord.rest import DiscordRestClient


def _log(msg: str):
    print(msg, file=sys.stderr)


_CHAT_INPUT = discord.AppCommandType.chat_input.value
_SUBCOMMAND = discord.AppCommandOptionType.subcommand.value
_INTEGER = discord.AppCommandOptionType.integer.value


def _int_option(name: str, description: str, min_value: int, max_value: int) -> Dict[str, Any]:
    return {
        "type": _INTEGER,
        "name": name,
        "description": description,
        "required": True,
        "min_value": min_value,
        "max_value": max_value,
    }


TEST_COMMAND = {
    "name": "test",
    "description": "basic command",
    "type": _CHAT_INPUT,
}

TUCKER_COMMAND = {
    "name": "tucker",
    "description": "tucker",
    "type": _CHAT_INPUT,
}

TOTD_COMMAND = {
    "name": "totd",
    "description": "Track of the Day",
    "type": _CHAT_INPUT,
    "options": [
        {
            "type": _SUBCOMMAND,
            "name": "today",
            "description": "Today's Track of the Day",
        },
        {
            "type": _SUBCOMMAND,
            "name": "past",
            "description": "Track of the Day for a given date",
            "options": [
                _int_option("year", "Year", 2020, 2100),
                _int_option("month", "Month", 1, 12),
                _int_option("day", "Day", 1, 31),
            ],
        },
    ],
}

ALL_COMMANDS: List[Dict[str, Any]] = [TEST_COMMAND, TUCKER_COMMAND, TOTD_COMMAND]


async def install_global_commands(client: DiscordRestClient, app_id: str) -> bool:
    """Register ALL_COMMANDS. Returns False (and logs) on failure."""
    try:
        await client.install_global_commands(app_id, ALL_COMMANDS)
    except Exception as e:
        _log(f"[Commands] registration failed: {e}")
        return False
    _log(f"[Commands] registered {len(ALL_COMMANDS)} global command(s)")
    return True
