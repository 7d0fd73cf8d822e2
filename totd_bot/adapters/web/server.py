"""FastAPI application: the interactions webhook."""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from totd_bot.ports.inbound import Interaction
from totd_bot.services.router import InteractionRouter
from totd_bot.services.scheduler import DailyJobScheduler


def _log(msg: str):
    print(msg, file=sys.stderr)


class InteractionRequest(BaseModel):
    type: int
    id: Optional[str] = None
    token: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    message: Optional[Dict[str, Any]] = None


def create_app(
    router: InteractionRouter,
    scheduler: Optional[DailyJobScheduler] = None,
    on_startup: Optional[Callable[[], Awaitable[Any]]] = None,
) -> FastAPI:
    """Build the app. The scheduler (if any) runs for the app's lifetime."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if on_startup is not None:
            await on_startup()
        scheduler_task = None
        if scheduler is not None:
            scheduler_task = asyncio.create_task(scheduler.run_forever(), name="totd-scheduler")
        _log("[Server] ready")
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.stop()
                scheduler_task.cancel()
            _log("[Server] shutdown complete")

    app = FastAPI(title="Track of the Day bot", lifespan=lifespan)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "whats up"

    @app.post("/interactions")
    async def interactions(req: InteractionRequest, background_tasks: BackgroundTasks):
        """Answer once; anything slower is finished as a background follow-up."""
        try:
            interaction = Interaction.from_payload(req.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        routed = router.route(interaction)
        if routed.followup is not None:
            background_tasks.add_task(routed.followup)
        return routed.initial

    return app
