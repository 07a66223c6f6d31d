from __future__ import annotations

import logging
import os
import sys
import threading
import weakref

from nicegui import ui

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVEL_COLORS = {
    "TRACE": "\033[32m",  # green
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[37m",  # light gray
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[41m",  # red background
}
_RESET = "\033[0m"
_DIM = "\033[2m"

# Third-party loggers that flood the console at DEBUG
_NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "watchfiles", "uvicorn.access")


def trace_enabled() -> bool:
    """Per-request logging is only emitted when IRRIGATION_TRACE is set."""
    return str(os.getenv("IRRIGATION_TRACE", "0")).lower() in ("1", "true", "yes", "on")


class AnsiColorFormatter(logging.Formatter):
    """Console formatter: dimmed HH:MM:SS stamp, colored level name."""

    def __init__(self, colored: bool = True) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
        )
        self.colored = colored and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = _LEVEL_COLORS.get(record.levelname.upper())
        if not self.colored or color is None:
            return line
        stamp, _, rest = line.partition(" ")
        rest = rest.replace(record.levelname, f"{color}{record.levelname}{_RESET}", 1)
        return f"{_DIM}{stamp}{_RESET} {rest}"


class NiceGuiLogHandler(logging.Handler):
    """Mirror log records into the activity log panel of every open page."""

    widgets: weakref.WeakSet = weakref.WeakSet()
    _lock = threading.Lock()

    def __init__(self, level: int = logging.INFO) -> None:
        super().__init__(level=level)
        self.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%H:%M:%S")
        )

    def emit(self, record: logging.LogRecord) -> None:
        with self._lock:
            widgets = list(self.widgets)
        if not widgets:
            return
        msg = self.format(record)
        for widget in widgets:
            if widget.is_deleted:
                detach_ui_log(widget)
                continue
            try:
                widget.push(msg)
            except RuntimeError:
                # Client already gone
                detach_ui_log(widget)


def attach_ui_log(log_widget: ui.log) -> None:
    with NiceGuiLogHandler._lock:
        NiceGuiLogHandler.widgets.add(log_widget)


def detach_ui_log(log_widget: ui.log) -> None:
    with NiceGuiLogHandler._lock:
        NiceGuiLogHandler.widgets.discard(log_widget)


def configure_logging(
    level: int = logging.INFO, use_color: bool = True, add_ui_handler: bool = True
) -> logging.Logger:
    """
    Configure the root logger once: colored stderr output plus, optionally,
    the page log panel (INFO and above). Repeated calls only adjust levels.
    """
    root = logging.getLogger()
    root.setLevel(level)
    handlers = root.handlers

    if not any(isinstance(h.formatter, AnsiColorFormatter) for h in handlers):
        console = logging.StreamHandler(stream=sys.stderr)
        console.setLevel(level)
        console.setFormatter(AnsiColorFormatter(colored=use_color))
        root.addHandler(console)

    if add_ui_handler and not any(isinstance(h, NiceGuiLogHandler) for h in handlers):
        root.addHandler(NiceGuiLogHandler(level=max(level, logging.INFO)))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return root
