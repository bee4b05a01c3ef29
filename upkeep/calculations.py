"""Helper functions for remaining-interval and status calculations."""

from datetime import date, datetime
from typing import Optional

from dateutil.parser import isoparse

from .errors import InvalidInput
from .status import Status


def to_calendar_date(value) -> Optional[date]:
    """
    Normalize a date-like value to a calendar date.

    Accepts ``date``, ``datetime`` or an ISO-8601 string ("2025-01-15" or a
    full timestamp). Time of day and UTC offset are dropped; the date as
    written is kept. ``None`` stays ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise InvalidInput(f"Invalid date {value!r}: {e}") from e
    raise InvalidInput(f"Not a date: {value!r}")


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative if end is earlier)."""
    return (end - start).days


def calc_distance_remaining(
    interval: Optional[float],
    last_distance: Optional[float],
    current_distance: float,
) -> Optional[float]:
    """
    Calculate distance left until the next due point.

    - No interval: None (dimension not applicable)
    - With a baseline: last_distance + interval - current_distance
    - Without a baseline: 0, so the task needs attention until one is logged
    """
    if interval is None:
        return None
    if last_distance is None:
        return 0
    return (last_distance + interval) - current_distance


def calc_time_remaining(
    interval_days: Optional[int],
    last_date: Optional[date],
    reference_date: date,
) -> Optional[int]:
    """Calculate whole days left until the next due date. Mirrors calc_distance_remaining."""
    if interval_days is None:
        return None
    if last_date is None:
        return 0
    return interval_days - days_between(last_date, reference_date)


def check_status(
    distance_remaining: Optional[float],
    time_remaining: Optional[int],
    lead_distance: float,
    lead_time: int,
) -> Status:
    """Determine status from the remaining values; the worst dimension wins."""
    if (distance_remaining is not None and distance_remaining <= 0) or (
        time_remaining is not None and time_remaining <= 0
    ):
        return Status.OVERDUE
    if (distance_remaining is not None and distance_remaining <= lead_distance) or (
        time_remaining is not None and time_remaining <= lead_time
    ):
        return Status.DUE_SOON
    return Status.OK
