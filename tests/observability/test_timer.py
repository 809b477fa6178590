#!filepath: tests/observability/test_timer.py

import time
from spending_planner.observability.timer import Timer

def test_timer_basic():
    t = Timer(enabled=True)
    t.start("calculate_timeline")
    time.sleep(0.01)
    elapsed = t.end("calculate_timeline")

    assert elapsed > 0
    assert isinstance(elapsed, float)

def test_timer_disabled():
    t = Timer(enabled=False)
    t.start("calculate_timeline")
    elapsed = t.end("calculate_timeline")

    assert elapsed == 0.0

def test_timer_end_without_start():
    t = Timer(enabled=True)
    assert t.end("never_started") == 0.0
