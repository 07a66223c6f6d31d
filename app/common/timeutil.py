from __future__ import annotations

import re
from datetime import datetime

_HHMM_RE = re.compile(r"[0-9]{2}:[0-9]{2}")


def pad(n: int) -> str:
    return f"{n:02d}"


def to_iso_no_tz(d: datetime) -> str:
    """Format as the device's RTC string, YYYY-MM-DDTHH:MM:SS without zone."""
    return (
        f"{d.year:04d}-{pad(d.month)}-{pad(d.day)}"
        f"T{pad(d.hour)}:{pad(d.minute)}:{pad(d.second)}"
    )


def is_valid_hhmm(s: str) -> bool:
    """True for 24h 'HH:MM' strings from 00:00 to 23:59."""
    if not isinstance(s, str) or not _HHMM_RE.fullmatch(s):
        return False
    return 0 <= int(s[:2]) <= 23 and 0 <= int(s[3:5]) <= 59
