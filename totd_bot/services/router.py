"""Interaction router: classifies an interaction and dispatches its handler.

Every interaction gets exactly one initial response (``RoutedResponse.initial``).
Work that needs the data provider runs afterwards as ``followup``, which only
ever edits the message (PATCH). Failures inside a follow-up are handed to the
ErrorResponder and never escape.
"""

import json
import sys
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

import discord
from zoneinfo import ZoneInfo

from totd_bot.adapters.discord import presentation
from totd_bot.config import AppConfig
from totd_bot.domain.custom_id import ControlAction, ControlState, decode
from totd_bot.domain.models import TrackRef
from totd_bot.domain.pagination import PaginationResolver
from totd_bot.ports.inbound import CommandOption, Interaction
from totd_bot.ports.outbound import MessagingPort, TrackDataPort
from totd_bot.services.errors import ErrorResponder
from totd_bot.services.totd import TotdService

Followup = Callable[[], Awaitable[None]]

_PONG = discord.InteractionResponseType.pong.value
_REPLY = discord.InteractionResponseType.channel_message.value
_DEFERRED_REPLY = discord.InteractionResponseType.deferred_channel_message.value
_DEFERRED_UPDATE = discord.InteractionResponseType.deferred_message_update.value


def _log(msg: str):
    print(msg, file=sys.stderr)


class InvalidDateError(ValueError):
    pass


@dataclass
class RoutedResponse:
    initial: Dict[str, Any]
    followup: Optional[Followup] = None


class InteractionRouter:
    def __init__(
        self,
        config: AppConfig,
        messenger: MessagingPort,
        tracks: TrackDataPort,
        totd: TotdService,
        errors: Optional[ErrorResponder] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._config = config
        self._messenger = messenger
        self._tracks = tracks
        self._totd = totd
        self._errors = errors or ErrorResponder(messenger)
        self._clock = clock
        self._pagination = PaginationResolver(config.leaderboard_max_page)

    def route(self, interaction: Interaction) -> RoutedResponse:
        if interaction.type is discord.InteractionType.ping:
            return RoutedResponse({"type": _PONG})
        if interaction.type is discord.InteractionType.application_command:
            return self._route_command(interaction)
        if interaction.type is discord.InteractionType.component:
            return self._route_component(interaction)
        raise ValueError(f"unsupported interaction type: {interaction.type}")

    def _guarded(self, endpoint: str, work: Followup) -> Followup:
        async def _run() -> None:
            try:
                await work()
            except Exception as e:
                await self._errors.report(endpoint, e)
        return _run

    # ── Commands ─────────────────────────────────────────────

    def _route_command(self, interaction: Interaction) -> RoutedResponse:
        name = interaction.command_name
        endpoint = self._config.webhook_endpoint(interaction.token)
        _log(f"[Router] command /{name}")

        if name == "tucker":
            return RoutedResponse({
                "type": _REPLY,
                "data": presentation.ephemeral_reply(f"i miss him <@{self._config.tucker_user_id}>"),
            })

        if name == "test":
            async def _test() -> None:
                await self._messenger.send_patch(endpoint, presentation.demo_message())
            return RoutedResponse({"type": _DEFERRED_REPLY}, self._guarded(endpoint, _test))

        if name == "totd":
            async def _totd() -> None:
                await self._handle_totd(endpoint, interaction.first_option())
            return RoutedResponse({"type": _DEFERRED_REPLY}, self._guarded(endpoint, _totd))

        return RoutedResponse({
            "type": _REPLY,
            "data": presentation.ephemeral_reply(f"Unknown command: {name}"),
        })

    async def _handle_totd(self, endpoint: str, option: Optional[CommandOption]) -> None:
        if option is not None and option.name == "past":
            track = await self._totd.for_day(self.resolve_past_date(option))
        else:
            track = await self._totd.current()
        await self._messenger.send_patch(endpoint, presentation.track_message(track))

    def today(self) -> date:
        return self._clock().astimezone(ZoneInfo(self._config.timezone)).date()

    def resolve_past_date(self, option: CommandOption) -> date:
        """Date requested by ``/totd past``; future dates clamp to today.

        Raises InvalidDateError for malformed dates and dates before the
        first Track of the Day.
        """
        fields = []
        for position, name in enumerate(("year", "month", "day")):
            field = option.find(name)
            if field is None and position < len(option.options):
                field = option.options[position]
            if field is None:
                raise InvalidDateError(f"Missing {name} for past Track of the Day")
            fields.append(field.value)

        try:
            requested = date(*(int(v) for v in fields))
        except (TypeError, ValueError) as e:
            raise InvalidDateError(f"Invalid date {'-'.join(map(str, fields))}: {e}")

        today = self.today()
        if requested > today:
            return today
        if requested < self._config.epoch_start:
            raise InvalidDateError("Date given is before Trackmania came out, silly :)")
        return requested

    # ── Components ───────────────────────────────────────────

    def _route_component(self, interaction: Interaction) -> RoutedResponse:
        state = decode(interaction.component_id or "")
        message = interaction.source_message
        ack = {"type": _DEFERRED_UPDATE}
        if message is None:
            _log(f"[Router] component {state.raw!r} without a source message, ignoring")
            return RoutedResponse(ack)

        endpoint = message.endpoint

        async def _component() -> None:
            await self._handle_component(endpoint, interaction, state)
        return RoutedResponse(ack, self._guarded(endpoint, _component))

    async def _handle_component(self, endpoint: str, interaction: Interaction, state: ControlState) -> None:
        _log(f"[Router] component {state.action.name} args={list(state.args)}")

        if state.action is ControlAction.TEST:
            _log(f"[Router] test control on message: {json.dumps(interaction.source_message.raw)}")

        elif state.action is ControlAction.CUP_OF_THE_DAY:
            cup = await self._tracks.cup_of_the_day()
            _log(f"[Router] cup of the day: {cup}")
            await self._messenger.send_patch(endpoint, presentation.cup_message(cup))

        elif state.action.is_leaderboard:
            query = self._pagination.resolve(state, interaction.selected_values)
            track = TrackRef(
                author=interaction.source_message.embed_author(),
                group_uid=query.group_uid,
                map_uid=query.map_uid,
            )
            board = await self._tracks.leaderboard(track, query.cursor, True, query.extra)
            await self._messenger.send_patch(
                endpoint,
                presentation.leaderboard_message(
                    track, board,
                    page_size=self._config.leaderboard_page_size,
                    max_page=self._config.leaderboard_max_page,
                    totd_date=state.args[2] if len(state.args) > 2 else None,
                ),
            )

        elif state.action is ControlAction.TRACK:
            kind, map_uid = state.arg(0), state.arg(1)
            extra = state.args[2] if len(state.args) > 2 else None
            totd_date = state.arg(3) if kind == "totd" else None
            if totd_date:
                label = f"Track of the Day - {totd_date}"
            else:
                label = "Map Search"
            track = await self._tracks.get_track_info(label, map_uid, extra)
            if totd_date:
                track = {**track, "date": track.get("date") or totd_date}
            await self._messenger.send_patch(endpoint, presentation.track_message(track))

        else:
            _log(f"[Router] unrecognized control {state.raw!r}, nothing to do")
