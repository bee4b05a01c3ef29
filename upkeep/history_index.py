"""Reduce service history to the most recent record per task."""

from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List

from .calculations import to_calendar_date
from .service_record import ServiceRecord


def latest_by_key(records: Iterable[ServiceRecord]) -> Dict[str, ServiceRecord]:
    """
    Map each task key to its most recent service record.

    Records may arrive in any order. The newest completion date wins; on the
    same date the higher record_id wins, then the later position in the
    input. Undated records lose to any dated one. Returned records carry
    their completion date normalized to ``datetime.date``.
    """
    latest: Dict[str, ServiceRecord] = {}
    rank = {}
    for position, record in enumerate(records):
        done = to_calendar_date(record.done_at_date)
        record_rank = (
            done or date.min,
            record.record_id if record.record_id is not None else -1,
            position,
        )
        if record.key not in rank or record_rank > rank[record.key]:
            rank[record.key] = record_rank
            latest[record.key] = replace(record, done_at_date=done)
    return latest


def sort_history(records: Iterable[ServiceRecord], reverse: bool = True) -> List[ServiceRecord]:
    """Sort records by completion date, then record_id. Newest first by default."""
    return sorted(
        records,
        key=lambda r: (
            to_calendar_date(r.done_at_date) or date.min,
            r.record_id if r.record_id is not None else -1,
        ),
        reverse=reverse,
    )
