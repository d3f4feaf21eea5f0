"""Periodic session eviction.

A daemon thread wakes every ``interval_s`` and calls
``SessionStore.sweep_expired``. It is the only periodic actor touching the
store, so no coordination beyond the store lock is needed.
"""
from __future__ import annotations

import logging
import threading
from time import time
from typing import Callable, List

from core import metrics
from .store import SessionStore

log = logging.getLogger("professor.sessions.sweeper")


class SessionSweeper:
    def __init__(
        self,
        store: SessionStore,
        max_age_s: float,
        interval_s: float,
        clock: Callable[[], float] = time,
    ) -> None:
        self._store = store
        self.max_age_s = max_age_s
        self.interval_s = interval_s
        self._clock = clock
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        t = self._thread
        return t is not None and t.is_alive()

    def run_once(self, now: float | None = None) -> List[str]:
        ts = self._clock() if now is None else now
        return self._store.sweep_expired(self.max_age_s, ts)

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_s):
            try:
                self.run_once()
            except Exception:  # noqa: BLE001
                metrics.inc("session_sweep_errors_total")
                log.exception("session sweep failed")

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._stop.clear()
            self._thread = threading.Thread(
                target=self._loop, name="session-sweeper", daemon=True
            )
            self._thread.start()
        log.info(
            "session sweeper started interval_s=%s max_age_s=%s",
            self.interval_s,
            self.max_age_s,
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        with self._lock:
            t = self._thread
            self._stop.set()
            self._thread = None
        if t is not None:
            t.join(timeout)


__all__ = ["SessionSweeper"]
