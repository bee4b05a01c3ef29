"""YAML loading and saving utilities for vehicle data."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .catalog import DEFAULT_CATALOG, Catalog, build_catalog
from .errors import InvalidInput, StorageError
from .service_record import ServiceRecord
from .task_def import Interval, MaintenanceTaskDef

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Snapshot:
    """Everything a computation needs, read from a vehicle file in one go."""

    name: Optional[str]
    current_distance: Optional[float]
    updated_at: Optional[str]
    catalog: Catalog
    records: Tuple[ServiceRecord, ...] = ()


def _read_raw(filename: PathLike) -> Dict[str, Any]:
    """Load the raw YAML mapping. A missing or empty file reads as {}."""
    path = Path(filename)
    if not path.exists():
        return {}
    try:
        with open(path, "r") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
    except (OSError, yaml.YAMLError) as e:
        raise StorageError(f"Cannot read {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise StorageError(f"{path}: expected a mapping at top level")
    return data


def _write_raw(filename: PathLike, data: Dict[str, Any]) -> None:
    try:
        with open(filename, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )
    except OSError as e:
        raise StorageError(f"Cannot write {filename}: {e}") from e


def _section(data: Dict[str, Any], name: str, kind: type, filename: PathLike):
    """Return data[name], or an empty kind() when absent."""
    value = data.get(name)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise StorageError(f"{filename}: '{name}' must be a {kind.__name__}")
    return value


def _parse_task(dct: Dict[str, Any]) -> MaintenanceTaskDef:
    """Parse a 'tasks' entry (camelCase keys) into a MaintenanceTaskDef."""
    return MaintenanceTaskDef(
        key=dct["key"],
        title=dct.get("title") or dct["key"],
        interval=Interval(
            distance=dct.get("intervalDistance"),
            days=dct.get("intervalDays"),
        ),
        lead_distance=dct.get("leadDistance", 0),
        lead_time=dct.get("leadDays", 0),
        notes=dct.get("notes"),
    )


def _task_to_dict(task: MaintenanceTaskDef) -> Dict[str, Any]:
    """Serialize a MaintenanceTaskDef to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {"key": task.key, "title": task.title}
    if task.interval.distance is not None:
        d["intervalDistance"] = task.interval.distance
    if task.interval.days is not None:
        d["intervalDays"] = task.interval.days
    if task.lead_distance:
        d["leadDistance"] = task.lead_distance
    if task.lead_time:
        d["leadDays"] = task.lead_time
    if task.notes is not None:
        d["notes"] = task.notes
    return d


def _parse_record(dct: Dict[str, Any], record_id: int) -> ServiceRecord:
    """Parse a 'history' entry into a ServiceRecord."""
    return ServiceRecord(
        key=dct["taskKey"],
        done_at_distance=dct.get("distance"),
        done_at_date=dct.get("date"),
        record_id=record_id,
    )


def read_current_distance(filename: PathLike) -> Optional[float]:
    """Stored odometer reading, or None if none has been recorded."""
    state = _section(_read_raw(filename), "state", dict, filename)
    return state.get("currentDistance")


def write_current_distance(filename: PathLike, distance: float) -> None:
    """
    Update the odometer reading in the state section of a vehicle file.

    Also stamps state.updatedAt. Creates the file if it does not exist.
    """
    data = _read_raw(filename)
    if data.get("state") is None:
        data["state"] = {}

    data["state"]["currentDistance"] = distance
    data["state"]["updatedAt"] = datetime.now(timezone.utc).isoformat()

    _write_raw(filename, data)
    logger.info("Stored odometer reading %s in %s", distance, filename)


def _records_from(data: Dict[str, Any], filename: PathLike) -> List[ServiceRecord]:
    history = _section(data, "history", list, filename)
    try:
        return [_parse_record(dct, i) for i, dct in enumerate(history)]
    except (KeyError, TypeError) as e:
        raise StorageError(f"{filename}: malformed history entry: {e}") from e


def read_service_records(filename: PathLike) -> List[ServiceRecord]:
    """All service records in insertion order; record_id is the list position."""
    return _records_from(_read_raw(filename), filename)


def append_service_record(
    filename: PathLike,
    key: str,
    distance: Optional[float] = None,
    done_at_date: Optional[str] = None,
) -> ServiceRecord:
    """
    Append a service record to a vehicle file.

    The date defaults to today. Returns the record as stored.
    """
    data = _read_raw(filename)
    if data.get("history") is None:
        data["history"] = []

    # Build the entry dict, omitting None values for cleaner YAML
    entry = {"taskKey": key, "date": done_at_date or date.today().isoformat()}
    if distance is not None:
        entry["distance"] = distance

    data["history"].append(entry)
    _write_raw(filename, data)
    logger.info("Logged %s on %s in %s", key, entry["date"], filename)

    return _parse_record(entry, len(data["history"]) - 1)


def _catalog_from(data: Dict[str, Any], filename: PathLike) -> Catalog:
    if data.get("tasks") is None:
        return DEFAULT_CATALOG
    tasks = _section(data, "tasks", list, filename)
    try:
        return build_catalog(_parse_task(dct) for dct in tasks)
    except (KeyError, TypeError, InvalidInput) as e:
        raise StorageError(f"{filename}: malformed task definition: {e}") from e


def load_catalog(filename: PathLike) -> Catalog:
    """Catalog from the file's 'tasks' section, or the built-in catalog."""
    return _catalog_from(_read_raw(filename), filename)


def save_catalog(filename: PathLike, catalog: Catalog) -> None:
    """Write a catalog into the file's 'tasks' section."""
    data = _read_raw(filename)
    data["tasks"] = [_task_to_dict(task) for task in build_catalog(catalog)]
    _write_raw(filename, data)
    logger.info("Saved %d tasks to %s", len(catalog), filename)


def init_vehicle_file(
    filename: PathLike,
    name: Optional[str] = None,
    current_distance: Optional[float] = None,
) -> None:
    """
    Create a new vehicle file with empty history.

    The built-in catalog applies until a 'tasks' section is added.
    Raises StorageError if the file already exists.
    """
    if Path(filename).exists():
        raise StorageError(f"{filename} already exists")

    data: Dict[str, Any] = {"vehicle": {}, "state": {}, "history": []}
    if name is not None:
        data["vehicle"]["name"] = name
    if current_distance is not None:
        data["state"]["currentDistance"] = current_distance
        data["state"]["updatedAt"] = datetime.now(timezone.utc).isoformat()

    _write_raw(filename, data)
    logger.info("Created vehicle file %s", filename)


def load_snapshot(filename: PathLike) -> Snapshot:
    """Read the whole vehicle file into an immutable snapshot."""
    data = _read_raw(filename)
    vehicle = _section(data, "vehicle", dict, filename)
    state = _section(data, "state", dict, filename)
    updated_at = state.get("updatedAt")
    return Snapshot(
        name=vehicle.get("name"),
        current_distance=state.get("currentDistance"),
        updated_at=str(updated_at) if updated_at is not None else None,
        catalog=_catalog_from(data, filename),
        records=tuple(_records_from(data, filename)),
    )
