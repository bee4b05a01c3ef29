"""Maintenance task definitions: what to do and how often."""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Optional

from .errors import InvalidInput


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Interval:
    """
    How often a task recurs.

    Either dimension may be absent. With both set the task is due by
    whichever one triggers first; with neither set it is never due.
    """

    distance: Optional[float] = None
    days: Optional[int] = None

    def __post_init__(self):
        if self.distance is not None:
            if not _is_number(self.distance) or not math.isfinite(self.distance):
                raise InvalidInput(f"Distance interval must be a number, got {self.distance!r}")
            if self.distance <= 0:
                raise InvalidInput(f"Distance interval must be positive, got {self.distance}")
        if self.days is not None:
            if not isinstance(self.days, int) or isinstance(self.days, bool):
                raise InvalidInput(f"Time interval must be whole days, got {self.days!r}")
            if self.days <= 0:
                raise InvalidInput(f"Time interval must be positive, got {self.days}")

    @property
    def is_empty(self) -> bool:
        return self.distance is None and self.days is None


@dataclass(frozen=True)
class MaintenanceTaskDef:
    """A recurring maintenance task from the catalog."""

    key: str
    title: str
    interval: Interval = field(default_factory=Interval)
    lead_distance: float = 0
    lead_time: int = 0
    notes: Optional[str] = None

    def __post_init__(self):
        if not self.key:
            raise InvalidInput("Task key must not be empty")
        if not _is_number(self.lead_distance) or not self.lead_distance >= 0:
            raise InvalidInput(
                f"{self.key}: lead distance must be non-negative, got {self.lead_distance!r}"
            )
        if not isinstance(self.lead_time, int) or isinstance(self.lead_time, bool) or self.lead_time < 0:
            raise InvalidInput(
                f"{self.key}: lead time must be non-negative whole days, got {self.lead_time!r}"
            )

    @property
    def display_name(self) -> str:
        return self.title or self.key
