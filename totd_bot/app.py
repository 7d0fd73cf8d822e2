"""Wiring: builds the router, scheduler and web app from an AppConfig."""

import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from totd_bot.adapters.discord.rest import DiscordRestClient
from totd_bot.adapters.storage.json_store import TotdCache
from totd_bot.adapters.trackmania.client import TrackmaniaClient
from totd_bot.adapters.web.server import create_app
from totd_bot.config import AppConfig
from totd_bot.domain.schedule import DailyTrigger
from totd_bot.ports.outbound import MessagingPort, TrackDataPort
from totd_bot.services.router import InteractionRouter
from totd_bot.services.scheduler import DailyJobScheduler
from totd_bot.services.totd import TotdService


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_app(
    config: AppConfig,
    messenger: Optional[MessagingPort] = None,
    tracks: Optional[TrackDataPort] = None,
) -> FastAPI:
    messenger = messenger or DiscordRestClient(config.discord_token, config.discord_api_base)
    tracks = tracks or TrackmaniaClient(
        config.nadeo, page_size=config.leaderboard_page_size, tz=config.timezone,
    )
    totd = TotdService(tracks, TotdCache(config.totd_cache_path))
    router = InteractionRouter(config, messenger, tracks, totd)

    scheduler = None
    if config.totd_channel_id:
        endpoint = config.totd_channel_endpoint()

        async def post_daily_totd() -> None:
            await totd.post_daily(messenger, endpoint)

        scheduler = DailyJobScheduler(
            DailyTrigger.from_cron(config.totd_schedule, config.timezone),
            post_daily_totd,
            name="daily-totd",
        )
    else:
        _log("[App] TOTD_CHANNEL_ID not set, daily post disabled")

    return create_app(router, scheduler=scheduler, on_startup=totd.warm_up)


def serve(config: Optional[AppConfig] = None) -> None:
    config = config or AppConfig.from_env()
    _log(f"[App] listening on port {config.port}")
    uvicorn.run(build_app(config), host="0.0.0.0", port=config.port, log_level="info")
