from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from app.common.render import RenderTarget
from app.constants import HOOK_NOTIFY_BAR, NOTIFY_DISMISS_S, NOTIFY_FADE_S
from app.state import Notification, NotificationKind, NotificationState

Scheduler = Callable[[float, Callable[[], None]], Any]


def loop_scheduler(delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    """Default scheduler: run callback on the current event loop after delay_s."""
    return asyncio.get_running_loop().call_later(delay_s, callback)


class NotificationCenter:
    """
    Single-slot message bar.

    A new message replaces the current one outright. Messages other than
    'info' dismiss themselves: after dismiss_s they fade, and fade_s later
    the bar is cleared. Timers are never cancelled; each one carries the
    generation of the message it was scheduled for and does nothing once a
    newer message has been shown.
    """

    def __init__(
        self,
        target: RenderTarget,
        *,
        scheduler: Scheduler = loop_scheduler,
        dismiss_s: float = NOTIFY_DISMISS_S,
        fade_s: float = NOTIFY_FADE_S,
        hook: str = HOOK_NOTIFY_BAR,
    ) -> None:
        self.target = target
        self._schedule = scheduler
        self.dismiss_s = dismiss_s
        self.fade_s = fade_s
        self.hook = hook
        self._generation = 0
        self.current: Notification | None = None
        self.state: NotificationState = "hidden"

    def show(self, text: str, kind: NotificationKind = "info") -> None:
        self._generation += 1
        if not text:
            self._hide()
            return

        self.current = Notification(text=text, kind=kind)
        self.state = "visible"
        self.target.set_text(self.hook, text)
        self.target.set_classes(self.hook, f"global show {kind}")
        logging.debug("Notification [%s]: %s", kind, text)

        if kind != "info":
            generation = self._generation
            self._schedule(self.dismiss_s, lambda: self._begin_fade(generation))

    def clear(self) -> None:
        self.show("", "info")

    def _begin_fade(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.state = "fading"
        self.target.add_class(self.hook, "fade-out")
        self._schedule(self.fade_s, self._hide)

    def _hide(self) -> None:
        self.current = None
        self.state = "hidden"
        self.target.set_text(self.hook, "")
        self.target.set_classes(self.hook, "global hidden")
