"""Status enum for maintenance urgency levels."""

from enum import Enum


class Status(Enum):
    """Maintenance status categories. Lower value = more urgent."""

    OVERDUE = 0
    DUE_SOON = 1
    OK = 2

    @property
    def label(self) -> str:
        """Human-readable label, e.g. 'DUE SOON'."""
        return self.name.replace("_", " ")
