from __future__ import annotations

import logging
from datetime import datetime
from typing import Awaitable, Callable, Protocol

from app.common.i18n import tr
from app.common.render import RenderTarget
from app.common.timeutil import to_iso_no_tz
from app.constants import HOOK_STATUS_MSG, HOOK_TIME_INPUT, HOOK_TIME_MSG
from app.services.device_client import DeviceError
from app.services.notifications import NotificationCenter


class CommandClient(Protocol):
    async def start(self) -> str: ...

    async def stop(self) -> str: ...

    async def set_time(self, value: str) -> str: ...


class Resync(Protocol):
    async def poll(self) -> bool: ...


class DeviceCommandDispatcher:
    """Start/stop/set-time actions with operator feedback.

    Only a successful command triggers an immediate status poll; failures are
    reported and left at that.
    """

    def __init__(
        self,
        client: CommandClient,
        target: RenderTarget,
        notifications: NotificationCenter,
        synchronizer: Resync,
    ) -> None:
        self.client = client
        self.target = target
        self.notifications = notifications
        self.synchronizer = synchronizer

    def _report(self, hook: str, text: str, ok: bool) -> None:
        self.target.set_text(hook, text)
        self.notifications.show(text, "ok" if ok else "err")

    async def _run(
        self,
        name: str,
        call: Callable[[], Awaitable[str]],
        ok_text: str,
        fail_key: str,
        hook: str,
    ) -> bool:
        try:
            await call()
        except DeviceError as e:
            logging.error("%s failed: %s", name, e)
            self._report(hook, tr(fail_key, error=e), ok=False)
            return False
        logging.info("%s sent", name)
        self._report(hook, ok_text, ok=True)
        await self.synchronizer.poll()
        return True

    async def start_watering(self) -> bool:
        return await self._run(
            "START",
            self.client.start,
            tr("watering_started"),
            "watering_start_failed",
            HOOK_STATUS_MSG,
        )

    async def stop_watering(self) -> bool:
        return await self._run(
            "STOP",
            self.client.stop,
            tr("watering_stopped"),
            "watering_stop_failed",
            HOOK_STATUS_MSG,
        )

    async def set_time(self, time_string: str | None = None) -> bool:
        """Send the RTC time as typed; format checking is left to the device."""
        if time_string is None:
            time_string = self.target.get_text(HOOK_TIME_INPUT)
        value = time_string.strip()
        return await self._run(
            "SET_TIME",
            lambda: self.client.set_time(value),
            tr("time_set", value=value),
            "time_set_failed",
            HOOK_TIME_MSG,
        )

    async def sync_clock(self, now: datetime | None = None) -> bool:
        """Set the RTC from this machine's local clock."""
        value = to_iso_no_tz(now or datetime.now())
        self.target.set_text(HOOK_TIME_INPUT, value)
        return await self.set_time(value)
