from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

# Farm-local timezone; "today" for defaults and period filters is computed here
DEFAULT_TIMEZONE_NAME = "Africa/Nairobi"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def local_today(tz: ZoneInfo | None = DEFAULT_TZ) -> date:
    """Return the current calendar date in `tz` (UTC when tz is None)."""
    return datetime.now(tz or timezone.utc).date()


def parse_iso_date(value: date | datetime | str | None) -> date | None:
    """Parse 'YYYY-MM-DD' (or a full ISO datetime) into a date.

    Returns None for empty or unparsable input instead of raising, so callers
    can treat a bad bound as "no bound".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = value.strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return date.fromisoformat(s)
    except ValueError:
        try:
            return datetime.fromisoformat(s).date()
        except ValueError:
            return None
