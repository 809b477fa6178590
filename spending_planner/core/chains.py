from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from spending_planner.core.priority import sort_by_priority, index_of, find_event
from spending_planner.core.types import SpendingEvent
from spending_planner.utils.errors import CorruptChainError

"""
{#!filepath: spending_planner/core/chains.py}

Event Chain Model (FINAL / FROZEN)

Chains are back-pointers embedded in the flat event list:
  event.locked_to_event_id -> predecessor id

Invariants:
- A link always points to a strictly smaller priority.
- At most one predecessor per event; toggle only links to the immediate
  priority-predecessor, so each event has at most one direct dependent.
- Result: a forest of simple paths, never a branching tree or a cycle.

All functions are pure over a snapshot. toggle_event_chain is the only
mutator and returns a NEW list.
"""


@dataclass(frozen=True)
class EventGroup:
    """A free-floating event, or a chain head followed by its dependents."""

    events: List[SpendingEvent]
    is_chain: bool


def is_chained_event(event: SpendingEvent) -> bool:
    return event.locked_to_event_id is not None


def is_chain_head(events: Sequence[SpendingEvent], event_id: str) -> bool:
    event = find_event(events, event_id)
    if event is None:
        return False

    # chain head 自身不能被锁定
    if is_chained_event(event):
        return False

    return any(e.locked_to_event_id == event_id for e in events)


def get_chain_head(events: Sequence[SpendingEvent], event_id: str) -> Optional[SpendingEvent]:
    """
    Walk predecessor links up to the unchained head.

    Every step must strictly decrease priority; anything else means the
    snapshot is corrupt and walking further could loop forever.
    """
    by_id: Dict[str, SpendingEvent] = {e.id: e for e in events}
    event = by_id.get(event_id)
    if event is None:
        return None

    while event.locked_to_event_id is not None:
        predecessor = by_id.get(event.locked_to_event_id)
        if predecessor is None:
            raise CorruptChainError(
                f"event {event.id!r} is locked to missing event {event.locked_to_event_id!r}"
            )
        if predecessor.priority >= event.priority:
            raise CorruptChainError(
                f"event {event.id!r} (priority={event.priority}) is locked to "
                f"{predecessor.id!r} (priority={predecessor.priority})"
            )
        event = predecessor

    return event


def get_chain_from_head(events: Sequence[SpendingEvent], head_id: str) -> List[SpendingEvent]:
    """[head, dependent_1, dependent_2, ...]；head 不存在时返回 []"""
    head = find_event(events, head_id)
    if head is None:
        return []

    chain = [head]
    visited = {head.id}

    # 只排序一次，每一步线性扫描
    ordered = sort_by_priority(events)

    current_id = head_id
    while True:
        nxt = next((e for e in ordered if e.locked_to_event_id == current_id), None)
        if nxt is None:
            break
        if nxt.id in visited:
            raise CorruptChainError(f"cycle detected at event {nxt.id!r}")
        chain.append(nxt)
        visited.add(nxt.id)
        current_id = nxt.id

    return chain


def toggle_event_chain(
    events: Sequence[SpendingEvent], event_id: str
) -> Optional[List[SpendingEvent]]:
    """
    free-floating -> lock to the immediate priority-predecessor
    chained       -> free-floating

    Returns None when the event cannot be toggled (unknown id, or first
    in priority order).
    """
    ordered = sort_by_priority(events)
    idx = index_of(ordered, event_id)

    if idx is None or idx == 0:
        return None

    event = ordered[idx]
    previous = ordered[idx - 1]

    new_lock = previous.id if event.locked_to_event_id is None else None

    return [
        replace(e, locked_to_event_id=new_lock) if e.id == event_id else e
        for e in events
    ]


def can_chain_event(events: Sequence[SpendingEvent], event_id: str) -> bool:
    idx = index_of(sort_by_priority(events), event_id)
    return idx is not None and idx > 0


def group_events_into_chains(events: Sequence[SpendingEvent]) -> List[EventGroup]:
    """
    Partition the queue into consecutive groups in priority order.

    Every event appears in exactly one group. A chained event that its
    head's walk did not reach (only possible with branching data) starts
    its own group instead of being dropped.
    """
    validate_chain_links(events)

    groups: List[EventGroup] = []
    processed: set = set()

    # links 单调递减 -> 前驱总是先被处理
    for event in sort_by_priority(events):
        if event.id in processed:
            continue

        chain = [e for e in get_chain_from_head(events, event.id) if e.id not in processed]
        processed.update(e.id for e in chain)
        groups.append(EventGroup(events=chain, is_chain=len(chain) > 1))

    return groups


def validate_chain_links(events: Sequence[SpendingEvent]) -> None:
    """
    Boundary check for externally supplied snapshots.

    Raises CorruptChainError on a dangling link or a link that does not
    point to a strictly smaller priority.
    """
    by_id: Dict[str, SpendingEvent] = {e.id: e for e in events}

    for e in events:
        if e.locked_to_event_id is None:
            continue
        predecessor = by_id.get(e.locked_to_event_id)
        if predecessor is None:
            raise CorruptChainError(
                f"event {e.id!r} is locked to missing event {e.locked_to_event_id!r}"
            )
        if predecessor.priority >= e.priority:
            raise CorruptChainError(
                f"event {e.id!r} (priority={e.priority}) must lock to a smaller "
                f"priority, got {predecessor.id!r} (priority={predecessor.priority})"
            )
