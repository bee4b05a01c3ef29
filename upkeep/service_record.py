"""ServiceRecord class for completed maintenance."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

DateLike = Union[date, str]


@dataclass(frozen=True)
class ServiceRecord:
    """
    A record of maintenance performed.

    ``done_at_date`` may be a ``date``/``datetime`` or an ISO-8601 string;
    only its calendar date is used. ``record_id`` is assigned by the store
    and increases with insertion order.
    """

    key: str
    done_at_distance: Optional[float] = None
    done_at_date: Optional[DateLike] = None
    record_id: Optional[int] = None
