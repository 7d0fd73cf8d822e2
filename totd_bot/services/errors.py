"""Error responder: turns a failure into one uniform user-facing message."""

import sys
import traceback

from totd_bot.adapters.discord.presentation import error_message
from totd_bot.ports.outbound import MessagingPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class ErrorResponder:
    def __init__(self, messenger: MessagingPort):
        self._messenger = messenger

    async def report(self, endpoint: str, error: BaseException) -> None:
        """PATCH an error embed to ``endpoint``. Never raises."""
        _log("".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip())
        try:
            await self._messenger.send_patch(endpoint, error_message(str(error)))
        except Exception as e:
            _log(f"[ErrorResponder] error sending error message: {e}")
