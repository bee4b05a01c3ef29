"""Due-status computation for the whole catalog."""

import logging
import math
from collections import Counter
from datetime import date
from numbers import Real
from typing import Iterable, List, Optional

from .calculations import (
    calc_distance_remaining,
    calc_time_remaining,
    check_status,
    to_calendar_date,
)
from .catalog import DEFAULT_CATALOG, Catalog, build_catalog
from .due_item import DueItem
from .errors import InvalidInput
from .history_index import latest_by_key
from .ranking import rank_due_items
from .service_record import ServiceRecord
from .task_def import MaintenanceTaskDef

logger = logging.getLogger(__name__)


def _validate_distance(distance, what: str = "Current distance") -> float:
    if distance is None or isinstance(distance, bool) or not isinstance(distance, Real):
        raise InvalidInput(f"{what} must be a number, got {distance!r}")
    if not math.isfinite(distance):
        raise InvalidInput(f"{what} must be finite, got {distance!r}")
    return distance


def _validate_records(records: List[ServiceRecord]) -> None:
    for record in records:
        if record.done_at_distance is not None:
            _validate_distance(record.done_at_distance, f"{record.key}: service distance")


def calculate_due_item(
    task: MaintenanceTaskDef,
    last: Optional[ServiceRecord],
    current_distance: float,
    reference_date: date,
) -> DueItem:
    """
    Calculate the due status of one task.

    ``last`` is the most recent record for the task (date already
    normalized), or None when the task has never been logged. Each
    dimension takes its baseline from that record independently.
    """
    last_distance = last.done_at_distance if last else None
    last_date = last.done_at_date if last else None

    distance_remaining = calc_distance_remaining(
        task.interval.distance, last_distance, current_distance
    )
    time_remaining = calc_time_remaining(task.interval.days, last_date, reference_date)

    return DueItem(
        task=task,
        status=check_status(
            distance_remaining, time_remaining, task.lead_distance, task.lead_time
        ),
        distance_remaining=distance_remaining,
        time_remaining=time_remaining,
    )


def compute_due_items(
    current_distance: float,
    reference_date,
    records: Iterable[ServiceRecord],
    catalog: Catalog = DEFAULT_CATALOG,
) -> List[DueItem]:
    """
    Compute and rank the due status of every catalog task.

    Args:
        current_distance: Current odometer reading.
        reference_date: "Today"; a date, datetime or ISO-8601 string.
        records: Service history in any order.
        catalog: Task definitions; their order breaks full ties when ranking.

    Raises:
        InvalidInput: before any per-task work, if the distance is not a
            finite number, a record distance is not a finite number, a
            date cannot be normalized or catalog keys repeat.
    """
    current_distance = _validate_distance(current_distance)
    today = to_calendar_date(reference_date)
    if today is None:
        raise InvalidInput("Reference date is required")
    catalog = build_catalog(catalog)
    records = list(records)
    _validate_records(records)
    last_by_key = latest_by_key(records)

    items = [
        calculate_due_item(task, last_by_key.get(task.key), current_distance, today)
        for task in catalog
    ]
    ranked = rank_due_items(items)

    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(item.status.name for item in ranked)
        logger.debug(
            "Computed %d tasks from %d records at %s on %s: %s",
            len(catalog),
            len(records),
            current_distance,
            today.isoformat(),
            dict(counts),
        )
    return ranked
