from __future__ import annotations

import logging
import math
import re
from collections.abc import MutableMapping
from typing import Any, Callable, cast, get_args

from app.common.i18n import tr
from app.common.render import RenderTarget
from app.constants import (
    DEFAULT_REFRESH_MS,
    DEFAULT_THEME,
    HOOK_ROOT,
    HOOK_THEME_ICON,
    MIN_REFRESH_MS,
    REFRESH_KEY,
    THEME_KEY,
)
from app.services.notifications import NotificationCenter
from app.state import ThemeMode

# Icon shows where a tap takes you
THEME_ICONS: dict[str, str] = {"dark": "☀️", "light": "🌙"}

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_int(value: Any) -> int | None:
    """Leading-integer parse: '300' and '300ms' give 300, 'abc' gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else None
    return None


class ThemePreference:
    """Persisted light/dark mode mirrored onto the render root."""

    def __init__(self, store: MutableMapping[str, Any], target: RenderTarget) -> None:
        self.store = store
        self.target = target

    def get_current_theme(self) -> ThemeMode:
        mode = self.store.get(THEME_KEY, DEFAULT_THEME)
        if isinstance(mode, str) and mode in get_args(ThemeMode):
            return cast("ThemeMode", mode)
        return cast("ThemeMode", DEFAULT_THEME)

    def set_theme(self, theme: ThemeMode) -> ThemeMode:
        """Apply, persist and reflect theme in the toggle icon."""
        if theme not in get_args(ThemeMode):
            raise ValueError(f"Unknown theme: {theme!r}")
        self.target.set_attr(HOOK_ROOT, "data-theme", theme)
        self.store[THEME_KEY] = theme
        self.target.set_text(HOOK_THEME_ICON, THEME_ICONS[theme])
        logging.debug("Set theme to mode: %s", theme)
        return theme

    def toggle_theme(self) -> ThemeMode:
        current = self.get_current_theme()
        return self.set_theme("dark" if current == "light" else "light")

    def initialize(self) -> ThemeMode:
        return self.set_theme(self.get_current_theme())


class RefreshIntervalConfig:
    """Validated, persisted status poll cadence in milliseconds."""

    def __init__(
        self,
        store: MutableMapping[str, Any],
        notifications: NotificationCenter,
        on_change: Callable[[int], None] | None = None,
    ) -> None:
        self.store = store
        self.notifications = notifications
        self.on_change = on_change

    def get_refresh_ms(self) -> int:
        v = parse_int(self.store.get(REFRESH_KEY, str(DEFAULT_REFRESH_MS)))
        return v if v is not None and v >= MIN_REFRESH_MS else DEFAULT_REFRESH_MS

    def set_refresh_ms(self, value: Any) -> bool:
        v = parse_int(value)
        if v is None or v < MIN_REFRESH_MS:
            logging.warning("Rejected refresh interval: %r", value)
            self.notifications.show(tr("refresh_invalid"), "err")
            return False
        self.store[REFRESH_KEY] = str(v)
        self.notifications.show(tr("refresh_saved"), "ok")
        logging.info("Refresh interval set to %d ms", v)
        if self.on_change is not None:
            self.on_change(v)
        return True
