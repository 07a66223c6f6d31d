from __future__ import annotations

import logging

from app.constants import MIN_REFRESH_MS, UI_LANG

_CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "title": "Irrigation controller",
        "status_fetch_failed": "Failed to fetch status: {error}",
        "config_fetch_failed": "Failed to fetch configuration: {error}",
        "watering_started": "Watering started",
        "watering_start_failed": "Failed to start watering: {error}",
        "watering_stopped": "Watering stopped",
        "watering_stop_failed": "Failed to stop watering: {error}",
        "time_set": "RTC time updated: {value}",
        "time_set_failed": "Error setting time: {error}",
        "refresh_invalid": f"UI interval: invalid value. Minimum: {MIN_REFRESH_MS} ms",
        "refresh_saved": "UI interval: saved successfully",
    },
    "lt": {
        "title": "Laistymo valdiklis",
        "status_fetch_failed": "Nepavyko gauti būsenos: {error}",
        "config_fetch_failed": "Nepavyko gauti konfigūracijos: {error}",
        "watering_started": "Laistymas pradėtas",
        "watering_start_failed": "Nepavyko pradėti laistymo: {error}",
        "watering_stopped": "Laistymas sustabdytas",
        "watering_stop_failed": "Nepavyko sustabdyti: {error}",
        "time_set": "RTC laikas atnaujintas: {value}",
        "time_set_failed": "Klaida nustatant laiką: {error}",
        "refresh_invalid": f"UI intervalas: Neteisinga reikšmė. Minimali: {MIN_REFRESH_MS} ms",
        "refresh_saved": "UI intervalas: Išsaugotas sėkmingai",
    },
}

_lang: str = UI_LANG if UI_LANG in _CATALOGS else "en"


def set_language(lang: str) -> str:
    """Select the active catalog; unknown languages fall back to English."""
    global _lang
    name = (lang or "").strip().lower()
    if name not in _CATALOGS:
        logging.warning("Unknown UI language %r, using English", lang)
        name = "en"
    _lang = name
    return _lang


def get_language() -> str:
    return _lang


def tr(key: str, **kwargs: object) -> str:
    """Look up a user-facing message in the active catalog and format it."""
    template = _CATALOGS[_lang].get(key) or _CATALOGS["en"][key]
    return template.format(**kwargs) if kwargs else template
