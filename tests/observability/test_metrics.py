#!filepath: tests/observability/test_metrics.py

from spending_planner.observability.metrics import MetricRecorder


def test_metric_record():
    m = MetricRecorder(enabled=True)
    m.record("events_triggered", 12)

    assert "events_triggered" in m.metrics
    assert m.metrics["events_triggered"] == 12


def test_metric_increment():
    m = MetricRecorder(enabled=True)
    m.increment("cache_hits")
    m.increment("cache_hits", 2)

    assert m.metrics["cache_hits"] == 3


def test_metric_disabled():
    m = MetricRecorder(enabled=False)
    m.record("x", 1)
    m.increment("y")

    # Nothing should be recorded
    assert m.metrics == {}
