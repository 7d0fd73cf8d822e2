"""Discord REST client using aiohttp: implements MessagingPort."""

import json
import sys
from typing import Any, Dict, List, Optional

import aiohttp

from totd_bot.config import DISCORD_API_BASE


def _log(msg: str):
    print(msg, file=sys.stderr)


class DiscordAPIError(RuntimeError):
    """Non-2xx response from the Discord API."""

    def __init__(self, status: int, body: Any):
        self.status = status
        self.body = body
        detail = body if isinstance(body, str) else json.dumps(body)
        super().__init__(f"Discord API {status}: {detail}")


class DiscordRestClient:
    """Thin async client for the handful of endpoints the bot calls."""

    def __init__(self, token: str, api_base: str = DISCORD_API_BASE):
        self._token = token
        self._api_base = api_base.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self._token)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bot {self._token}",
            "Content-Type": "application/json; charset=UTF-8",
        }

    async def request(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        url = f"{self._api_base}/{endpoint.lstrip('/')}"
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, json=body, headers=self._headers()) as resp:
                if resp.status >= 400:
                    try:
                        data = await resp.json()
                    except (aiohttp.ContentTypeError, ValueError):
                        data = await resp.text()
                    _log(f"[Discord] {method} {endpoint} -> {resp.status}")
                    raise DiscordAPIError(resp.status, data)
                if resp.status == 204:
                    return None
                return await resp.json()

    async def send_patch(self, endpoint: str, body: Dict[str, Any]) -> Any:
        return await self.request("PATCH", endpoint, body)

    async def send_post(self, endpoint: str, body: Dict[str, Any]) -> Any:
        return await self.request("POST", endpoint, body)

    async def install_global_commands(self, app_id: str, commands: List[Dict[str, Any]]) -> Any:
        """Overwrite the application's global slash commands."""
        return await self.request("PUT", f"applications/{app_id}/commands", commands)
