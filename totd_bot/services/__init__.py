"""Application services: routing, error reporting, TOTD, scheduling."""

from totd_bot.services.errors import ErrorResponder
from totd_bot.services.router import InteractionRouter, InvalidDateError, RoutedResponse
from totd_bot.services.scheduler import DailyJobScheduler
from totd_bot.services.totd import TotdService

__all__ = [
    "ErrorResponder",
    "InteractionRouter",
    "InvalidDateError",
    "RoutedResponse",
    "DailyJobScheduler",
    "TotdService",
]
