"""Entry point: ``python -m totd_bot [serve|register]``."""

import asyncio
import sys

from totd_bot.adapters.discord.commands import install_global_commands
from totd_bot.adapters.discord.rest import DiscordRestClient
from totd_bot.app import serve
from totd_bot.config import AppConfig


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    command = argv[0] if argv else "serve"
    config = AppConfig.from_env()

    if command == "serve":
        serve(config)
        return 0
    if command == "register":
        client = DiscordRestClient(config.discord_token, config.discord_api_base)
        ok = asyncio.run(install_global_commands(client, config.app_id))
        return 0 if ok else 1

    print(f"usage: python -m totd_bot [serve|register] (got {command!r})", file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
