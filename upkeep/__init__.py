"""
Vehicle maintenance due-status engine.

This package decides which recurring maintenance tasks are due:
- Status: Urgency levels (OVERDUE, DUE_SOON, OK)
- MaintenanceTaskDef / Interval: Task catalog entries
- ServiceRecord: Completed services
- DueItem: Calculated status of one task
- compute_due_items: Ranked status of a whole catalog
- loader: YAML vehicle file store
"""

from .errors import InvalidInput, StorageError
from .status import Status
from .task_def import Interval, MaintenanceTaskDef
from .service_record import ServiceRecord
from .due_item import DueItem
from .catalog import DEFAULT_CATALOG, build_catalog, get_task
from .calculations import (
    to_calendar_date,
    days_between,
    calc_distance_remaining,
    calc_time_remaining,
    check_status,
)
from .history_index import latest_by_key, sort_history
from .ranking import rank_due_items
from .engine import calculate_due_item, compute_due_items
from .loader import (
    Snapshot,
    load_snapshot,
    load_catalog,
    save_catalog,
    read_current_distance,
    write_current_distance,
    read_service_records,
    append_service_record,
    init_vehicle_file,
)

__all__ = [
    "InvalidInput",
    "StorageError",
    "Status",
    "Interval",
    "MaintenanceTaskDef",
    "ServiceRecord",
    "DueItem",
    "DEFAULT_CATALOG",
    "build_catalog",
    "get_task",
    "to_calendar_date",
    "days_between",
    "calc_distance_remaining",
    "calc_time_remaining",
    "check_status",
    "latest_by_key",
    "sort_history",
    "rank_due_items",
    "calculate_due_item",
    "compute_due_items",
    "Snapshot",
    "load_snapshot",
    "load_catalog",
    "save_catalog",
    "read_current_distance",
    "write_current_distance",
    "read_service_records",
    "append_service_record",
    "init_vehicle_file",
]
