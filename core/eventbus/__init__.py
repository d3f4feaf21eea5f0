"""EventBus (sync in-process).

Features:
  - subscribe(event_name, handler)
  - emit(event_name, payload) adds ts if missing
  - handler isolation (exceptions logged + counted, not propagated)
    - metrics counters:
            events_emitted_total{event}, handler_exceptions_total{event}

The chat exchange publishes on the bus and the activity ledger subscribes,
so bookkeeping faults can never reach the caller of the exchange.
Each service container owns its own bus instance (no module singleton).
"""
from __future__ import annotations

import logging
from threading import RLock
from time import time
from typing import Any, Callable, Dict, List

from core import metrics

Handler = Callable[[Dict[str, Any]], None]

CHAT_EXCHANGE_COMPLETED = "ChatExchangeCompleted"
CHAT_EXCHANGE_FAILED = "ChatExchangeFailed"

log = logging.getLogger("professor.eventbus")


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Handler]] = {}
        self._lock = RLock()

    def subscribe(self, event: str, handler: Handler) -> None:
        with self._lock:
            self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Dict[str, Any]) -> int:
        """Dispatch to subscribers; returns number of handlers that failed."""
        if "ts" not in payload:
            payload["ts"] = time()
        with self._lock:
            subs = list(self._subs.get(event, ()))
        metrics.inc("events_emitted_total", {"event": event})
        failures = 0
        for h in subs:
            try:
                h(dict(payload))  # shallow copy for safety
            except Exception:  # noqa: BLE001
                failures += 1
                metrics.inc("handler_exceptions_total", {"event": event})
                log.warning("event handler failed event=%s", event, exc_info=True)
        return failures

    def reset_for_tests(self) -> None:  # pragma: no cover
        with self._lock:
            self._subs.clear()


__all__ = [
    "EventBus",
    "Handler",
    "CHAT_EXCHANGE_COMPLETED",
    "CHAT_EXCHANGE_FAILED",
]
