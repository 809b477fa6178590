"""
Core Planner Model (FINAL / FROZEN)

Defines WHAT the planner world is, independent of any UI, storage or caching.

Invariants:
- Time is measured in whole weeks from a start date (week 0 = current week).
- Each currency's balance is fully isolated; no cross-currency conversion.
- SpendingEvent.priority defines a total order over the event queue.
- locked_to_event_id only ever points to an event with a strictly smaller
  priority, so chains form a forest of simple paths.
- All value objects are immutable; mutators return new snapshots.

Core explicitly does NOT:
- Perform IO, logging or persistence
- Render timelines
- Derive income from historical runs
"""
