import pytest

from core import metrics


def test_metrics_snapshot_counters_and_histograms():
    metrics.inc("session_turns_total", {"role": "user"})
    metrics.inc("session_turns_total", {"role": "user"}, value=2)
    metrics.observe("completion_latency_ms", 10.0)
    metrics.observe("completion_latency_ms", 30.0)
    snap = metrics.snapshot()
    assert snap["counters"]["session_turns_total{role=user}"] == 3
    hist = snap["histograms"]["completion_latency_ms"]
    assert hist["count"] == 2
    assert hist["min"] == 10.0
    assert hist["max"] == 30.0
    assert hist["last"] == 30.0


def test_counter_lookup_defaults_to_zero():
    assert metrics.counter("never_hit_total") == 0.0
    metrics.inc("hit_total", {"b": 2, "a": 1})
    # label order is irrelevant
    assert metrics.counter("hit_total", {"a": 1, "b": 2}) == 1.0


def test_domain_helpers_reject_unknown_labels():
    metrics.inc_session_evicted("expired")
    metrics.inc_chat_exchange("invalid")
    assert metrics.counter("session_evicted_total", {"reason": "expired"}) == 1
    assert metrics.counter("chat_exchanges_total", {"status": "invalid"}) == 1
    with pytest.raises(ValueError):
        metrics.inc_session_evicted("forgotten")
    with pytest.raises(ValueError):
        metrics.inc_completion("maybe")


def test_histogram_keeps_bounded_window():
    for i in range(metrics.HIST_WINDOW + 50):
        metrics.observe("completion_latency_ms", float(i))
    hist = metrics.snapshot()["histograms"]["completion_latency_ms"]
    assert hist["count"] == metrics.HIST_WINDOW
    assert hist["min"] == 50.0
    assert hist["last"] == float(metrics.HIST_WINDOW + 49)
