from __future__ import annotations

import logging

import pytest

from app.common.logging_config import (
    TRACE,
    AnsiColorFormatter,
    NiceGuiLogHandler,
    attach_ui_log,
    configure_logging,
    detach_ui_log,
    trace_enabled,
)


class FakeLogWidget:
    """Collects pushed lines like ui.log does."""

    def __init__(self, fail: bool = False) -> None:
        self.lines: list[str] = []
        self.is_deleted = False
        self.fail = fail

    def push(self, line: str) -> None:
        if self.fail:
            raise RuntimeError("client disconnected")
        self.lines.append(line)


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def widget():
    w = FakeLogWidget()
    attach_ui_log(w)
    yield w
    detach_ui_log(w)


def _record(msg: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("app", level, __file__, 1, msg, None, None)


@pytest.mark.unit
def test_trace_level_is_named():
    assert logging.getLevelName(TRACE) == "TRACE"


@pytest.mark.unit
@pytest.mark.parametrize("value, enabled", [("1", True), ("on", True), ("0", False)])
def test_trace_enabled_reads_environment(monkeypatch, value, enabled):
    monkeypatch.setenv("IRRIGATION_TRACE", value)
    assert trace_enabled() is enabled


@pytest.mark.unit
def test_ui_handler_pushes_to_attached_widget(widget):
    NiceGuiLogHandler().emit(_record("Pump started"))
    assert len(widget.lines) == 1
    assert "[INFO] Pump started" in widget.lines[0]


@pytest.mark.unit
def test_ui_handler_detaches_deleted_and_failing_widgets(widget):
    gone = FakeLogWidget()
    gone.is_deleted = True
    broken = FakeLogWidget(fail=True)
    attach_ui_log(gone)
    attach_ui_log(broken)

    NiceGuiLogHandler().emit(_record("Status poll failed"))

    assert gone not in NiceGuiLogHandler.widgets
    assert broken not in NiceGuiLogHandler.widgets
    assert widget in NiceGuiLogHandler.widgets
    assert widget.lines


@pytest.mark.unit
def test_configure_logging_is_idempotent(root_logger):
    configure_logging(logging.DEBUG, use_color=False)
    configure_logging(logging.INFO, use_color=False)

    console = [
        h for h in root_logger.handlers if isinstance(h.formatter, AnsiColorFormatter)
    ]
    ui_handlers = [h for h in root_logger.handlers if isinstance(h, NiceGuiLogHandler)]
    assert len(console) == 1
    assert len(ui_handlers) == 1
    assert root_logger.level == logging.INFO
    assert logging.getLogger("aiohttp.client").level == logging.WARNING


@pytest.mark.unit
def test_uncolored_formatter_leaves_level_plain():
    line = AnsiColorFormatter(colored=False).format(_record("Watering stopped"))
    assert "\033[" not in line
    assert "INFO app: Watering stopped" in line
