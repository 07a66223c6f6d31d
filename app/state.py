from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

NotificationKind = Literal["info", "ok", "err", "warning"]
ThemeMode = Literal["light", "dark"]
NotificationState = Literal["hidden", "visible", "fading"]

# Opaque device configuration, rendered verbatim
ConfigSnapshot = dict[str, Any]


@dataclass(frozen=True)
class DeviceStatus:
    """One /status reading. Replaced wholesale on every poll."""

    temp: Any = None  # °C, -999 = unavailable
    hum: Any = None  # %, -999 = unavailable
    pres: Any = None  # hPa, -999 = unavailable
    water_level: Any = None
    state: Any = None
    remaining_time_sec: int | None = None
    current_time: Any = None  # "YYYY-MM-DDTHH:MM:SS"

    @property
    def rtc_valid(self) -> bool:
        # Not reported by the device; an unset RTC reports year 0000
        return bool(self.current_time) and not str(self.current_time).startswith(
            "0000"
        )

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> DeviceStatus:
        return cls(
            temp=payload.get("temp"),
            hum=payload.get("hum"),
            pres=payload.get("pres"),
            water_level=payload.get("waterLevel"),
            state=payload.get("state"),
            remaining_time_sec=payload.get("remainingTimeSec"),
            current_time=payload.get("currentTime"),
        )


@dataclass(frozen=True)
class Notification:
    text: str
    kind: NotificationKind = "info"
