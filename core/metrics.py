"""Minimal in-memory metrics collector.

Purpose:
    - Counters and simple latency samples for the chat round trip.
    - Zero external deps; can be swapped by Prometheus exporter later.

Core API (intentionally tiny):
    inc(name, labels=None, value=1)
    observe(name, value, labels=None)
    counter(name, labels=None) -> float
    snapshot() -> dict (copy for safe reading)

Thread-safety: coarse RLock; overhead negligible for classroom traffic.
Histograms keep a sliding window of the last ``HIST_WINDOW`` samples, so
snapshot stats describe recent traffic only.

Metric names (documented for discoverability):
    - session_turns_total{role}
    - session_evicted_total{reason}            # empty | expired | cleared
    - session_sweep_errors_total
    - completion_requests_total{status}        # ok | error
    - completion_latency_ms
    - chat_exchanges_total{status}             # ok | failed | invalid
    - events_emitted_total{event}
    - handler_exceptions_total{event}
    - api_request_total{route,method}          # route = matched template
    - api_request_latency_ms{route,method}
    - api_request_errors_total{route,method,status}
    - env_override_total{path}
"""
from __future__ import annotations

from collections import deque
from threading import RLock
from time import time
from typing import Dict, Tuple, Any

_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = {}
_HIST: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], deque] = {}
# samples kept per histogram; older samples are dropped
HIST_WINDOW = 1024
_LOCK = RLock()


def _norm_labels(labels: dict[str, Any] | None) -> Tuple[Tuple[str, str], ...]:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


def _key_str(name: str, labels: Tuple[Tuple[str, str], ...]) -> str:
    if not labels:
        return name
    return name + "{" + ",".join(f"{k}={v}" for k, v in labels) + "}"


def inc(
    name: str,
    labels: dict[str, Any] | None = None,
    value: float = 1.0,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _COUNTERS[key] = _COUNTERS.get(key, 0.0) + value


def observe(
    name: str,
    value: float,
    labels: dict[str, Any] | None = None,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _HIST.setdefault(key, deque(maxlen=HIST_WINDOW)).append(value)


def counter(name: str, labels: dict[str, Any] | None = None) -> float:
    """Return current value of a single counter (0.0 when never hit)."""
    with _LOCK:
        return _COUNTERS.get((name, _norm_labels(labels)), 0.0)


def snapshot() -> dict[str, Any]:
    with _LOCK:
        counters = {
            _key_str(name, labels): v
            for (name, labels), v in _COUNTERS.items()
        }
        hist = {}
        for (name, labels), vals in _HIST.items():
            if not vals:
                continue
            hist[_key_str(name, labels)] = {
                "count": len(vals),
                "min": min(vals),
                "max": max(vals),
                "p50": sorted(vals)[len(vals) // 2],
                "last": vals[-1],
            }
        return {
            "ts": time(),
            "counters": counters,
            "histograms": hist,
        }


def reset_for_tests() -> None:  # pragma: no cover
    with _LOCK:
        _COUNTERS.clear()
        _HIST.clear()


__all__ = [
    "inc",
    "observe",
    "counter",
    "snapshot",
    "reset_for_tests",
]


# ------------------- Helper wrappers (domain) -------------------

_EVICTION_REASONS = frozenset({"empty", "expired", "cleared"})
_COMPLETION_STATUSES = frozenset({"ok", "error"})
_EXCHANGE_STATUSES = frozenset({"ok", "failed", "invalid"})


def inc_session_evicted(reason: str) -> None:
    """Increment eviction counter.

    reason: one of
        - empty    (no turns at sweep time)
        - expired  (first turn older than max age)
        - cleared  (explicit clear request)
    """
    if reason not in _EVICTION_REASONS:
        raise ValueError(f"unknown eviction reason: {reason}")
    inc("session_evicted_total", {"reason": reason})


def inc_completion(status: str) -> None:
    """Count one provider round trip (ok | error)."""
    if status not in _COMPLETION_STATUSES:
        raise ValueError(f"unknown completion status: {status}")
    inc("completion_requests_total", {"status": status})


def inc_chat_exchange(status: str) -> None:
    """Count one chat exchange outcome (ok | failed | invalid)."""
    if status not in _EXCHANGE_STATUSES:
        raise ValueError(f"unknown exchange status: {status}")
    inc("chat_exchanges_total", {"status": status})


__all__ += [
    "inc_session_evicted",
    "inc_completion",
    "inc_chat_exchange",
]
