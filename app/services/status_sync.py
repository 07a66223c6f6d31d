from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any, Protocol

from app.common.i18n import tr
from app.common.render import RenderTarget
from app.constants import (
    DEFAULT_REFRESH_MS,
    HOOK_CONFIG,
    HOOK_HUM,
    HOOK_PRES,
    HOOK_REMAINING,
    HOOK_RTC_VALID,
    HOOK_STATE,
    HOOK_STATUS_MSG,
    HOOK_TEMP,
    HOOK_TIME,
    HOOK_WATER,
    SENSOR_UNAVAILABLE,
)
from app.services.device_client import DeviceError
from app.state import DeviceStatus

PLACEHOLDER = "-"


class StatusSource(Protocol):
    async def get_status(self) -> dict[str, Any]: ...

    async def get_config(self) -> Any: ...


def format_reading(value: Any, unit: str) -> str:
    """Render a sensor reading; the -999 sentinel and missing values become '-'."""
    if value is None or value == SENSOR_UNAVAILABLE:
        return PLACEHOLDER
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:.1f} {unit}"
    return str(value)


def _literal(value: Any) -> str:
    return str(value) if value else PLACEHOLDER


def render_status(status: DeviceStatus) -> dict[str, str]:
    """Map one status reading onto display strings keyed by render hook."""
    remaining = status.remaining_time_sec
    return {
        HOOK_TEMP: format_reading(status.temp, "°C"),
        HOOK_HUM: format_reading(status.hum, "%"),
        HOOK_PRES: format_reading(status.pres, "hPa"),
        HOOK_WATER: _literal(status.water_level),
        HOOK_STATE: _literal(status.state),
        HOOK_REMAINING: PLACEHOLDER if remaining is None else f"{remaining} s",
        HOOK_TIME: _literal(status.current_time),
        HOOK_RTC_VALID: "true" if status.rtc_valid else "false",
    }


class StatusSynchronizer:
    """
    Keeps the status fields in sync with the device.

    start() runs a fixed-delay loop that fires poll() every interval without
    waiting for the previous request, so a hanging request never delays the
    next tick. Requests are numbered; a response that completes after a newer
    one has already been applied is dropped.
    """

    def __init__(self, client: StatusSource, target: RenderTarget) -> None:
        self.client = client
        self.target = target
        self.interval_ms: int = DEFAULT_REFRESH_MS
        self.last_status: DeviceStatus | None = None
        self._issued = 0
        self._applied = 0
        self._loop_task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def poll(self) -> bool:
        """Fetch /status once and render it. Returns True when rendered."""
        self._issued += 1
        seq = self._issued
        try:
            payload = await self.client.get_status()
        except DeviceError as e:
            if seq < self._applied:
                logging.debug("Dropping stale status failure #%d", seq)
                return False
            self._applied = seq
            logging.warning("Status poll failed: %s", e)
            # Previously rendered values stay in place
            self.target.set_text(HOOK_STATUS_MSG, tr("status_fetch_failed", error=e))
            return False

        if seq < self._applied:
            logging.debug("Dropping stale status response #%d", seq)
            return False
        self._applied = seq
        status = DeviceStatus.from_json(payload)
        self.last_status = status
        for hook, text in render_status(status).items():
            self.target.set_text(hook, text)
        return True

    async def get_config(self) -> bool:
        """Fetch /config once and show it pretty-printed."""
        try:
            snapshot = await self.client.get_config()
        except DeviceError as e:
            logging.warning("Config fetch failed: %s", e)
            self.target.set_text(HOOK_CONFIG, tr("config_fetch_failed", error=e))
            return False
        self.target.set_text(
            HOOK_CONFIG, json.dumps(snapshot, indent=2, ensure_ascii=False)
        )
        return True

    # ---- Scheduling ----

    def _spawn_poll(self) -> None:
        task = asyncio.create_task(self.poll())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self, interval_s: float) -> None:
        while True:
            self._spawn_poll()
            await asyncio.sleep(interval_s)

    def start(self, interval_ms: int | None = None) -> None:
        """Start the recurring poll (first tick fires immediately)."""
        if interval_ms is not None:
            self.interval_ms = interval_ms
        if self.running:
            return
        self._loop_task = asyncio.create_task(self._run(self.interval_ms / 1000.0))
        logging.info("Status polling every %d ms", self.interval_ms)

    async def stop(self) -> None:
        task, self._loop_task = self._loop_task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        for t in list(self._inflight):
            t.cancel()
        self._inflight.clear()

    def restart(self, interval_ms: int) -> None:
        """Switch cadence now; polls already in flight are left to finish."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None
        self.start(interval_ms)
