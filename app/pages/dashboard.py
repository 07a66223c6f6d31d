from __future__ import annotations

from nicegui import ui

from app.common.render import NiceGuiRenderTarget
from app.constants import (
    HOOK_BTN_REFRESH,
    HOOK_BTN_SET_TIME,
    HOOK_BTN_START,
    HOOK_BTN_STOP,
    HOOK_CONFIG,
    HOOK_HUM,
    HOOK_PRES,
    HOOK_REMAINING,
    HOOK_RTC_VALID,
    HOOK_STATE,
    HOOK_STATUS_MSG,
    HOOK_TEMP,
    HOOK_TIME,
    HOOK_TIME_INPUT,
    HOOK_TIME_MSG,
    HOOK_WATER,
)
from app.services.commands import DeviceCommandDispatcher
from app.services.status_sync import PLACEHOLDER, StatusSynchronizer

STATUS_FIELDS: list[tuple[str, str]] = [
    (HOOK_TEMP, "Temperature"),
    (HOOK_HUM, "Humidity"),
    (HOOK_PRES, "Pressure"),
    (HOOK_WATER, "Water level"),
    (HOOK_STATE, "State"),
    (HOOK_REMAINING, "Remaining"),
    (HOOK_TIME, "Device time"),
    (HOOK_RTC_VALID, "RTC valid"),
]


class DashboardPage:
    """Status readout, watering commands, RTC time and device config."""

    def __init__(
        self,
        target: NiceGuiRenderTarget,
        synchronizer: StatusSynchronizer,
        dispatcher: DeviceCommandDispatcher,
    ) -> None:
        self.target = target
        self.sync = synchronizer
        self.dispatcher = dispatcher

    def _build_status(self) -> None:
        with ui.card().classes("w-full"):
            ui.label("Status").classes("text-md font-medium")
            with ui.element("div").classes("status-grid"):
                for hook, title in STATUS_FIELDS:
                    ui.label(title).classes("status-key text-sm")
                    self.target.register(
                        hook, ui.label(PLACEHOLDER).classes("status-val text-sm")
                    )
            self.target.register(
                HOOK_STATUS_MSG, ui.label("").classes("text-sm text-[var(--panel-muted)]")
            )

    def _build_commands(self) -> None:
        t = self.target
        with ui.card().classes("w-full"):
            ui.label("Watering").classes("text-md font-medium")
            with ui.row().classes("items-center gap-2"):
                t.register(
                    HOOK_BTN_REFRESH,
                    ui.button("Refresh", on_click=self.sync.poll).props("unelevated"),
                )
                t.register(
                    HOOK_BTN_START,
                    ui.button("Start", on_click=self.dispatcher.start_watering).props(
                        "unelevated color=positive"
                    ),
                )
                t.register(
                    HOOK_BTN_STOP,
                    ui.button("Stop", on_click=self.dispatcher.stop_watering).props(
                        "unelevated color=negative"
                    ),
                )
            ui.separator()
            ui.label("RTC time").classes("text-sm font-medium")
            with ui.row().classes("items-center gap-2"):
                time_input = t.register(
                    HOOK_TIME_INPUT,
                    ui.input(label="Time", placeholder="YYYY-MM-DDTHH:MM:SS").props(
                        "dense"
                    ),
                )
                time_input.on("keydown.enter", lambda: self.dispatcher.set_time())
                t.register(
                    HOOK_BTN_SET_TIME,
                    ui.button("Set time", on_click=lambda: self.dispatcher.set_time()),
                )
                ui.button(
                    "Use this computer's clock", on_click=lambda: self.dispatcher.sync_clock()
                ).props("flat")
            t.register(HOOK_TIME_MSG, ui.label("").classes("text-sm"))

    def _build_config(self) -> None:
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Device configuration").classes("text-md font-medium")
                ui.button(icon="refresh", on_click=self.sync.get_config).props(
                    "flat round dense"
                )
            self.target.register(HOOK_CONFIG, ui.label("").classes("config-json"))

    def build(self) -> None:
        """Build the dashboard content."""
        with ui.element("div").classes("w-full grid md:grid-cols-2 gap-4"):
            with ui.column().classes("gap-4"):
                self._build_status()
                self._build_commands()
            with ui.column().classes("gap-4"):
                self._build_config()
