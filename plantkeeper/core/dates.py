"""PlantKeeper date helpers - calendar-day arithmetic for care schedules."""

import logging
import math
from datetime import date, datetime, time, timezone
from typing import NamedTuple, Union

logger = logging.getLogger("plantkeeper.dates")

Timestamp = Union[datetime, date, str, int, float]


class DayDifference(NamedTuple):
    """Signed whole-day gap between two timestamps.

    ``valid`` is False when either input could not be parsed; ``days`` is
    then 0, which is indistinguishable from a same-day result on its own.
    """

    days: int
    valid: bool = True


INVALID_DIFFERENCE = DayDifference(days=0, valid=False)


def parse_timestamp(value) -> datetime | None:
    """Coerce a stored timestamp into a datetime, or None if it does not parse.

    Accepts datetimes, dates (taken as midnight), ISO-8601 strings and
    epoch milliseconds.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _calendar_date(moment: datetime, zone) -> date:
    """Truncate a datetime to its calendar date in ``zone``.

    Naive datetimes are already local wall time. Aware ones are converted to
    ``zone``, or to the system local zone when ``zone`` is None.
    """
    if moment.tzinfo is None:
        return moment.date()
    if zone is None:
        return moment.astimezone().date()
    return moment.astimezone(zone).date()


def day_difference(reference: Timestamp, other: Timestamp) -> DayDifference:
    """Return the calendar-day gap ``reference - other``.

    Positive when ``other`` lies in the past relative to ``reference``.
    Time of day is discarded on both sides, in the reference's zone.
    """
    ref = parse_timestamp(reference)
    oth = parse_timestamp(other)
    if ref is None or oth is None:
        logger.debug(f"Unparseable timestamp in day difference: {reference!r}, {other!r}")
        return INVALID_DIFFERENCE

    zone = ref.tzinfo
    if zone is not None and oth.tzinfo is None:
        # Naive values are read as wall time in the reference's zone
        oth = oth.replace(tzinfo=zone)

    try:
        delta = _calendar_date(ref, zone) - _calendar_date(oth, zone)
    except OverflowError:
        # Zone conversion pushed a timestamp past year 1 or 9999
        logger.debug(f"Timestamp out of calendar range in day difference: {reference!r}, {other!r}")
        return INVALID_DIFFERENCE
    return DayDifference(days=delta.days)


def days_between(reference: Timestamp, other: Timestamp) -> int:
    """Signed calendar-day gap, falling back to 0 for unparseable input."""
    return day_difference(reference, other).days
