"""Built-in task catalog and catalog validation."""

from typing import Iterable, Tuple

from .errors import InvalidInput
from .task_def import Interval, MaintenanceTaskDef

MONTH = 30
YEAR = 365

Catalog = Tuple[MaintenanceTaskDef, ...]

# Default schedule for a 2024 Acura Integra (CVT)
DEFAULT_CATALOG: Catalog = (
    MaintenanceTaskDef(
        key="oil_change",
        title="Oil change",
        interval=Interval(distance=5500, days=6 * MONTH),
        lead_distance=500,
        lead_time=14,
        notes="Every 5-6k miles or 6 months (whichever comes first).",
    ),
    MaintenanceTaskDef(
        key="tire_rotation",
        title="Tire rotation",
        interval=Interval(distance=5500, days=6 * MONTH),
        lead_distance=500,
        lead_time=14,
        notes="Usually done with oil changes.",
    ),
    MaintenanceTaskDef(
        key="cvt_fluid",
        title="CVT fluid",
        interval=Interval(distance=35000),
        lead_distance=1500,
        notes="30-40k miles; default set to 35k.",
    ),
    MaintenanceTaskDef(
        key="engine_air_filter",
        title="Engine air filter",
        interval=Interval(distance=15000),
        lead_distance=1000,
    ),
    MaintenanceTaskDef(
        key="cabin_air_filter",
        title="Cabin air filter",
        interval=Interval(distance=15000),
        lead_distance=1000,
    ),
    MaintenanceTaskDef(
        key="brake_fluid",
        title="Brake fluid",
        interval=Interval(days=3 * YEAR),
        lead_time=30,
    ),
    MaintenanceTaskDef(
        key="spark_plugs",
        title="Spark plugs",
        interval=Interval(distance=60000),
        lead_distance=3000,
    ),
    MaintenanceTaskDef(
        key="coolant",
        title="Coolant",
        interval=Interval(distance=100000, days=10 * YEAR),
        lead_distance=5000,
        lead_time=60,
    ),
)


def build_catalog(tasks: Iterable[MaintenanceTaskDef]) -> Catalog:
    """
    Freeze task definitions into a catalog.

    Order is preserved (it is the final tie-break when ranking).
    Raises InvalidInput on duplicate keys.
    """
    catalog = tuple(tasks)
    seen = set()
    for task in catalog:
        if task.key in seen:
            raise InvalidInput(f"Duplicate task key in catalog: {task.key}")
        seen.add(task.key)
    return catalog


def get_task(catalog: Catalog, key: str):
    """Find a task by key (case-insensitive). Returns None if not found."""
    normalized = key.lower()
    for task in catalog:
        if task.key.lower() == normalized:
            return task
    return None
