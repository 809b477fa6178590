from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from spending_planner.core.types import SpendingEvent
# spending_planner/core/priority.py


def sort_by_priority(events: Iterable[SpendingEvent]) -> List[SpendingEvent]:
    """
    Total order over events by priority.

    sorted() is stable, so equal priorities keep their input order.
    """
    return sorted(events, key=lambda e: e.priority)


def index_of(events: Sequence[SpendingEvent], event_id: str) -> Optional[int]:
    for i, e in enumerate(events):
        if e.id == event_id:
            return i
    return None


def find_event(events: Iterable[SpendingEvent], event_id: str) -> Optional[SpendingEvent]:
    for e in events:
        if e.id == event_id:
            return e
    return None
