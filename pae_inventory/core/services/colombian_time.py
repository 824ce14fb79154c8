"""
Date helpers for the America/Bogota zone.

Colombia has no daylight saving time, so the zone is a fixed UTC-5 offset.
Movements travel in UTC; the dashboard enters and filters dates as
Colombian wall-clock values.
"""

import re
from datetime import date, datetime, time, timedelta, timezone

COLOMBIA_TZ = timezone(timedelta(hours=-5), "America/Bogota")

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_iso(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def now_in_colombia() -> datetime:
    """Current instant expressed in Colombian time."""
    return datetime.now(COLOMBIA_TZ)


def current_colombian_date() -> date:
    """Today's calendar date in Colombia."""
    return now_in_colombia().date()


def colombian_date(value: datetime) -> date:
    """Calendar date of an instant in Colombia. Naive values are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(COLOMBIA_TZ).date()


def colombian_to_utc(value: str, now: datetime | None = None) -> datetime:
    """
    Interpret a Colombian wall-clock string as a UTC instant.

    Accepts ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM[:SS]``. A date-only value
    takes the current Colombian time of day.

    Args:
        value: Colombian local date or datetime.
        now: Override for the current time, used for date-only values.

    Raises:
        ValueError: If the value is not an ISO date or datetime.
    """
    value = value.strip()
    if _DATE_ONLY.match(value):
        current = (now or now_in_colombia()).astimezone(COLOMBIA_TZ)
        local = datetime.combine(
            date.fromisoformat(value),
            time(current.hour, current.minute, current.second),
        )
    else:
        local = datetime.fromisoformat(value).replace(tzinfo=None)

    return local.replace(tzinfo=COLOMBIA_TZ).astimezone(timezone.utc)


def to_date_only(value: str | None) -> str:
    """
    ``YYYY-MM-DD`` in Colombia for an ISO date or datetime string.

    Date-only input is returned as is. Input that does not parse falls back
    to the text before ``T``.
    """
    if not value:
        return ""
    if _DATE_ONLY.match(value):
        return value

    try:
        parsed = _parse_iso(value)
    except ValueError:
        return value.split("T")[0]
    return colombian_date(parsed).isoformat()


def to_utc_iso(value: str | None = None) -> str:
    """
    ISO UTC timestamp (``...Z``) for a Colombian wall-clock string.

    ``None`` means now. Raises ValueError like :func:`colombian_to_utc`.
    """
    instant = colombian_to_utc(value) if value else datetime.now(timezone.utc)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")
