from __future__ import annotations

import logging
import os
from pathlib import Path

# Repository root
REPO_ROOT = Path(__file__).resolve().parent.parent

# Device target (what the UI talks to)
DEVICE_BASE_URL: str = os.getenv("IRRIGATION_DEVICE_URL", "http://192.168.4.1").rstrip(
    "/"
)
REQUEST_TIMEOUT_S: float = float(os.getenv("IRRIGATION_REQUEST_TIMEOUT_S", "5.0"))

# Webserver bind (NiceGUI host/port)
SERVER_HOST: str = os.getenv("IRRIGATION_SERVER_IP", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("IRRIGATION_SERVER_PORT", "8080"))
# Required by NiceGUI for per-browser app.storage.user
STORAGE_SECRET: str = os.getenv("IRRIGATION_STORAGE_SECRET", "irrigation-panel")

# User-facing language for status and notification texts ("en" / "lt")
UI_LANG: str = os.getenv("IRRIGATION_UI_LANG", "en").strip().lower()

# ---- Device protocol ----

SENSOR_UNAVAILABLE = -999
STATUS_PATH = "/status"
CONFIG_PATH = "/config"
START_PATH = "/start"
STOP_PATH = "/stop"
SET_TIME_PATH = "/config/time"

# ---- Persisted preferences ----

THEME_KEY = "theme"
REFRESH_KEY = "uiRefreshMs"
DEFAULT_THEME = "light"
DEFAULT_REFRESH_MS = 1000
MIN_REFRESH_MS = 250

# ---- Notification bar timing ----

NOTIFY_DISMISS_S = 3.0
NOTIFY_FADE_S = 0.2

# ---- Render hooks ----

HOOK_ROOT = "root"
HOOK_TEMP = "s-temp"
HOOK_HUM = "s-hum"
HOOK_PRES = "s-pres"
HOOK_WATER = "s-water"
HOOK_STATE = "s-state"
HOOK_REMAINING = "s-remaining"
HOOK_TIME = "s-time"
HOOK_RTC_VALID = "s-rtcValid"
HOOK_STATUS_MSG = "status-msg"
HOOK_TIME_MSG = "time-msg"
HOOK_CONFIG = "config-json"
HOOK_NOTIFY_BAR = "globalMsg"
HOOK_THEME_ICON = "themeIcon"
HOOK_TIME_INPUT = "in-time"
HOOK_BTN_REFRESH = "btn-refresh"
HOOK_BTN_START = "btn-start"
HOOK_BTN_STOP = "btn-stop"
HOOK_BTN_SET_TIME = "btn-set-time"


def _resolve_log_level() -> int:
    s = os.getenv("IRRIGATION_LOG_LEVEL")
    if s:
        name = s.strip().upper()
        mapping = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return mapping.get(name, logging.WARNING)
    else:
        return logging.WARNING


LOG_LEVEL: int = _resolve_log_level()
