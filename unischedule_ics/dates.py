"""
Date/time normalization.

All values are naive local wall-clock dates and timestamps. Parsing is
deliberately permissive: malformed or out-of-range components are not
rejected but rolled over by date arithmetic, e.g.

    2025-02-30 -> 2025-03-02
    2024-02-30 -> 2024-03-01
    25:00      -> 01:00 on the following day
"""

from __future__ import annotations

import re
import secrets
import string
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from typing import Optional, Protocol

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class Clock(Protocol):
    """
    Source of wall-clock time and randomness (injectable for tests).
    """

    def now(self) -> datetime: ...

    def suffix(self) -> str: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()

    def suffix(self) -> str:
        return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))


def _leading_int(text: str) -> int:
    """
    Integer value of the leading digits of text, 0 if there are none.
    """
    match = re.match(r"\s*(-?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_calendar_date(value: str) -> date:
    """
    Parse 'YYYY-MM-DD' into a local civil date. Never raises.

    Month and day overflow roll forward (or backward) like calendar
    arithmetic; non-numeric parts count as 0.
    """
    parts = (str(value).split("-") + ["", ""])[:3]
    year, month, day = (_leading_int(p) for p in parts)

    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    year = min(max(year, MINYEAR), MAXYEAR)

    first = date(year, month, 1)
    try:
        return first + timedelta(days=day - 1)
    except OverflowError:
        return first


def combine(day: date, time_hh_mm: str) -> datetime:
    """
    Overlay 'H:MM' / 'HH:MM' onto a date, seconds zeroed. Never raises.

    Out-of-range hours/minutes roll into adjacent hours and days.
    """
    hour_s, _, minute_s = str(time_hh_mm).partition(":")
    midnight = datetime(day.year, day.month, day.day)
    try:
        return midnight + timedelta(hours=_leading_int(hour_s), minutes=_leading_int(minute_s))
    except OverflowError:
        return midnight


def format_timestamp(ts: datetime) -> str:
    """
    Render as 'YYYYMMDDTHHMMSS' (no timezone suffix).
    """
    return f"{ts.year:04d}{ts.month:02d}{ts.day:02d}T{ts.hour:02d}{ts.minute:02d}{ts.second:02d}"


def current_timestamp(clock: Optional[Clock] = None) -> str:
    """
    The current wall-clock time in ICS form, sampled at call time.
    """
    return format_timestamp((clock or SystemClock()).now())


def iso_to_ics_datetime(iso_string: str) -> str:
    """
    Convert an ISO 8601 timestamp into compact ICS form.

    '2025-02-01T09:00:00Z'     -> '20250201T090000Z'
    '2025-02-01T09:00:00.250Z' -> '20250201T090000Z'
    """
    text = re.sub(r"\.\d+", "", iso_string.strip())
    utc = text.endswith("Z")
    text = re.sub(r"(Z|[+-]\d{2}:?\d{2})$", "", text)
    return text.replace("-", "").replace(":", "") + ("Z" if utc else "")
