from __future__ import annotations

from nicegui import ui

from app.constants import MIN_REFRESH_MS
from app.services.preferences import RefreshIntervalConfig


class SettingsPage:
    """Settings card: status poll cadence."""

    def __init__(self, refresh: RefreshIntervalConfig) -> None:
        self.refresh = refresh

    def build(self) -> None:
        with ui.card().classes("w-full"):
            ui.label("Settings").classes("text-md font-medium")
            with ui.row().classes("items-center gap-2"):
                refresh_input = ui.number(
                    label="UI refresh (ms)",
                    value=self.refresh.get_refresh_ms(),
                    min=MIN_REFRESH_MS,
                    step=250,
                    format="%.0f",
                ).props("dense")

                def _save() -> None:
                    self.refresh.set_refresh_ms(refresh_input.value)

                refresh_input.on("keydown.enter", _save)
                ui.button("Save", on_click=_save).props("unelevated")
