from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_lesson_time(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except (TypeError, ValueError):
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current time in the configured timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name))


def today_local(tz_name: str = DEFAULT_TIMEZONE) -> date:
    return now_local(tz_name).date()
