from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from app.common.logging_config import TRACE, trace_enabled
from app.constants import (
    CONFIG_PATH,
    DEVICE_BASE_URL,
    REQUEST_TIMEOUT_S,
    SET_TIME_PATH,
    START_PATH,
    STATUS_PATH,
    STOP_PATH,
)


class DeviceError(Exception):
    """Any failure talking to the irrigation controller."""


class TransportError(DeviceError):
    """The request could not complete (connection refused, timeout, ...)."""


class ApiError(DeviceError):
    """The device answered with a non-success status or an unusable body."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DeviceClient:
    """Async HTTP client for the controller's REST API.

    The session is created lazily on first use so the client can be built at
    import time, before the event loop runs.
    """

    def __init__(
        self,
        base_url: str = DEVICE_BASE_URL,
        *,
        session: ClientSession | None = None,
        timeout: float = REQUEST_TIMEOUT_S,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get_session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            self._session = ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> tuple[int, str]:
        url = self._url(path)
        if trace_enabled():
            logging.log(TRACE, "%s %s %s", method, url, payload or "")
        try:
            async with self._get_session().request(
                method,
                url,
                json=payload,
                timeout=ClientTimeout(total=self.timeout),
            ) as resp:
                # Device firmware may emit stray non-UTF-8 bytes
                return resp.status, await resp.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise TransportError(f"timeout after {self.timeout:g} s") from e
        except ClientError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

    async def _get_json(self, path: str) -> Any:
        status, text = await self._request("GET", path)
        if not 200 <= status < 300:
            raise ApiError(f"HTTP {status}", status=status)
        try:
            return json.loads(text)
        except ValueError as e:
            raise ApiError(f"invalid JSON: {e}", status=status) from e

    async def _command(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> str:
        status, text = await self._request(method, path, payload)
        if not 200 <= status < 300:
            # Device puts the reason in the plain-text body
            raise ApiError(text or f"HTTP {status}", status=status)
        return text

    # ---- Device API ----

    async def get_status(self) -> dict[str, Any]:
        data = await self._get_json(STATUS_PATH)
        if not isinstance(data, dict):
            raise ApiError("invalid status payload")
        return data

    async def get_config(self) -> Any:
        return await self._get_json(CONFIG_PATH)

    async def start(self) -> str:
        return await self._command("GET", START_PATH)

    async def stop(self) -> str:
        return await self._command("GET", STOP_PATH)

    async def set_time(self, value: str) -> str:
        return await self._command("POST", SET_TIME_PATH, {"time": value})


# Module-level singleton instance
client = DeviceClient()
