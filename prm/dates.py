"""Date helpers shared by models and services.

All datetimes are stored in UTC. Presentation helpers convert into the
account timezone on the way out.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

_SHORT_DATE_FORMATS = {
    "en": "%b %d, %Y",
}
_DEFAULT_SHORT_DATE_FORMAT = "%d %b %Y"

_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_ymd(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string. Raises ValueError when malformed."""
    if not isinstance(value, str):
        raise ValueError(f"expected a YYYY-MM-DD string, got {type(value).__name__}")
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def approximate_birthdate(age: int, today: date | None = None) -> date:
    """January 1st of the year someone aged ``age`` was born in."""
    today = today or utcnow().date()
    return date(today.year - int(age), 1, 1)


def years_between(start: date, end: date) -> int:
    """Whole years elapsed from ``start`` to ``end``."""
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


def create_date_from_format(value: object, tz_name: str | None = "UTC") -> datetime | None:
    """Coerce a stored date/datetime into an aware datetime in ``tz_name``.

    Naive datetimes are assumed to be UTC and converted. Plain dates are
    calendar days and become midnight of that same day in ``tz_name``.
    """
    if value is None:
        return None

    tz = ZoneInfo(tz_name or "UTC")

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        return as_utc(value).astimezone(tz)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tz)
    raise TypeError(f"cannot convert {type(value).__name__} to a datetime")


def get_short_date(value: date | datetime, locale: str = "en") -> str:
    """Format as a short date, e.g. ``Oct 29, 1981``."""
    fmt = _SHORT_DATE_FORMATS.get((locale or "en").lower(), _DEFAULT_SHORT_DATE_FORMAT)
    return value.strftime(fmt)


def diff_for_humans(value: datetime, now: datetime | None = None) -> str:
    """Relative description like ``3 days ago`` or ``2 hours from now``."""
    now = as_utc(now) or utcnow()
    delta = (now - as_utc(value)).total_seconds()
    suffix = "ago" if delta >= 0 else "from now"
    seconds = abs(int(delta))

    for unit, size in _UNITS:
        if seconds >= size:
            count = seconds // size
            break
    else:
        unit, count = "second", 1

    plural = "" if count == 1 else "s"
    return f"{count} {unit}{plural} {suffix}"
