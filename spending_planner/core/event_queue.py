from __future__ import annotations
import random
import string
import time
from dataclasses import replace
from typing import List, Sequence

from spending_planner.core.chains import get_chain_from_head, get_chain_head, is_chained_event
from spending_planner.core.priority import sort_by_priority, index_of
from spending_planner.core.types import SpendingEvent
from spending_planner.utils.errors import TimelineValidationError
# spending_planner/core/event_queue.py

# 只能通过 chain / reorder 修改
_PROTECTED_FIELDS = ("id", "priority", "locked_to_event_id")

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _reindex(events: Sequence[SpendingEvent]) -> List[SpendingEvent]:
    """priority 重新编号为 0..n-1（保持顺序）"""
    return [
        e if e.priority == i else replace(e, priority=i)
        for i, e in enumerate(events)
    ]


def generate_event_id() -> str:
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"event-{int(time.time() * 1000)}-{suffix}"


def add_event(events: Sequence[SpendingEvent], event: SpendingEvent) -> List[SpendingEvent]:
    """Append at the end of the queue, always free-floating."""
    priority = max((e.priority for e in events), default=-1) + 1
    return [*events, replace(event, priority=priority, locked_to_event_id=None)]


def remove_event(events: Sequence[SpendingEvent], event_id: str) -> List[SpendingEvent]:
    """
    Remove by id and re-index priorities.

    Direct dependents of the removed event become free-floating; their own
    dependents stay chained to them.
    """
    remaining = [
        replace(e, locked_to_event_id=None) if e.locked_to_event_id == event_id else e
        for e in sort_by_priority(events)
        if e.id != event_id
    ]
    return _reindex(remaining)


def update_event(events: Sequence[SpendingEvent], event_id: str, **changes) -> List[SpendingEvent]:
    protected = sorted(set(changes) & set(_PROTECTED_FIELDS))
    if protected:
        raise TimelineValidationError(f"fields cannot be edited directly: {protected}")

    return [replace(e, **changes) if e.id == event_id else e for e in events]


def reorder_events(
    events: Sequence[SpendingEvent], from_index: int, to_index: int
) -> List[SpendingEvent]:
    """
    Chain-aware drag & drop over the priority-ordered queue.

    - chained events are not draggable on their own
    - a chain head moves together with its whole chain
    - dropping onto a chain (head or member) lands before that chain's head
    - dropping a head onto its own dependents is a no-op

    Always returns the queue in priority order; no-op cases keep the
    existing priorities.
    """
    ordered = sort_by_priority(events)
    n = len(ordered)

    if not (0 <= from_index < n and 0 <= to_index < n):
        return ordered
    if from_index == to_index:
        return ordered

    moved = ordered[from_index]
    if is_chained_event(moved):
        return ordered

    block = get_chain_from_head(ordered, moved.id)
    block_ids = {e.id for e in block}

    target = ordered[to_index]
    if target.id in block_ids:
        return ordered

    rest = [e for e in ordered if e.id not in block_ids]

    target_head = get_chain_head(ordered, target.id)
    target_chain = get_chain_from_head(ordered, target_head.id)

    if len(target_chain) > 1:
        # 永远插在 chain 之前，不能拆开 chain
        insert_at = index_of(rest, target_head.id)
    elif to_index > from_index:
        insert_at = index_of(rest, target.id) + 1
    else:
        insert_at = index_of(rest, target.id)

    result = rest[:insert_at] + block + rest[insert_at:]
    return _reindex(result)


def clone_event(events: Sequence[SpendingEvent], event_id: str) -> List[SpendingEvent]:
    """
    Copy an event with a fresh id, free-floating, inserted after the
    source's chain so the chain stays contiguous.
    """
    ordered = sort_by_priority(events)
    idx = index_of(ordered, event_id)
    if idx is None:
        return list(events)

    source = ordered[idx]
    head = get_chain_head(ordered, source.id)
    tail = get_chain_from_head(ordered, head.id)[-1]
    insert_at = index_of(ordered, tail.id) + 1

    cloned = replace(
        source,
        id=generate_event_id(),
        name=f"{source.name} (copy)",
        locked_to_event_id=None,
    )

    result = ordered[:insert_at] + [cloned] + ordered[insert_at:]
    return _reindex(result)
