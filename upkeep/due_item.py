"""DueItem dataclass for calculated task status."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .status import Status

if TYPE_CHECKING:
    from .task_def import MaintenanceTaskDef


@dataclass(frozen=True)
class DueItem:
    """Calculated due information for one catalog task."""

    task: "MaintenanceTaskDef"
    status: Status
    distance_remaining: Optional[float] = None
    time_remaining: Optional[int] = None

    @property
    def key(self) -> str:
        return self.task.key

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)

    @property
    def min_remaining(self) -> float:
        """Smallest present remaining value; infinity when neither is present."""
        present = [
            v for v in (self.distance_remaining, self.time_remaining) if v is not None
        ]
        if not present:
            return float("inf")
        return min(present)
