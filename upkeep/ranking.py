"""Order due items by urgency."""

from typing import Iterable, List

from .due_item import DueItem


def urgency_key(item: DueItem):
    """Sort key: status rank first, then closeness to due."""
    return (item.status.value, item.min_remaining)


def rank_due_items(items: Iterable[DueItem]) -> List[DueItem]:
    """
    Sort items OVERDUE, DUE_SOON, OK; closest to due first within a status.

    ``sorted`` is stable, so full ties keep their incoming (catalog) order.
    """
    return sorted(items, key=urgency_key)
