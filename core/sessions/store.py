"""In-memory session store.

Maps caller-supplied session ids to an append-only list of turns.
Eviction is not lazy: ``sweep_expired`` is driven by the periodic
sweeper (see ``core.sessions.sweeper``). Every access takes the same
lock so the sweeper never sees a half-updated collection.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Callable, Dict, List

from core import metrics

USER = "user"
ASSISTANT = "assistant"
ROLES = (USER, ASSISTANT)

log = logging.getLogger("professor.sessions")


@dataclass(frozen=True, slots=True)
class Turn:
    role: str  # user|assistant
    content: str
    ts: float

    def as_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(slots=True)
class Session:
    session_id: str
    turns: List[Turn] = field(default_factory=list)

    @property
    def created_at(self) -> float | None:
        """Timestamp of the first turn (None while empty)."""
        return self.turns[0].ts if self.turns else None

    def copy(self) -> "Session":
        return Session(self.session_id, list(self.turns))

    def __len__(self) -> int:
        return len(self.turns)


class SessionStore:
    def __init__(self, clock: Callable[[], float] = time) -> None:
        self._sessions: Dict[str, Session] = {}
        self._clock = clock
        self._lock = RLock()

    def turn(self, role: str, content: str) -> Turn:
        """Build a turn stamped with the store clock."""
        if role not in ROLES:
            raise ValueError(f"unknown role '{role}'")
        return Turn(role=role, content=content, ts=self._clock())

    def get_or_create(self, session_id: str) -> Session:
        with self._lock:
            s = self._sessions.get(session_id)
            if s is None:
                s = Session(session_id)
                self._sessions[session_id] = s
            return s.copy()

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            s = self._sessions.get(session_id)
            return s.copy() if s is not None else None

    def history(self, session_id: str) -> List[Turn]:
        with self._lock:
            s = self._sessions.get(session_id)
            return list(s.turns) if s is not None else []

    def append(self, session_id: str, turn: Turn) -> int:
        """Append ``turn``; returns the new session length."""
        with self._lock:
            s = self._sessions.get(session_id)
            if s is None:
                s = Session(session_id)
                self._sessions[session_id] = s
            s.turns.append(turn)
            size = len(s.turns)
        metrics.inc("session_turns_total", {"role": turn.role})
        return size

    def clear(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            metrics.inc_session_evicted("cleared")
        return removed

    def sweep_expired(
        self, max_age: float, now: float | None = None
    ) -> List[str]:
        """Evict empty sessions and sessions whose first turn is too old."""
        ts = self._clock() if now is None else now
        evicted: List[str] = []
        with self._lock:
            for sid, s in list(self._sessions.items()):
                created = s.created_at
                if created is None:
                    reason = "empty"
                elif ts - created > max_age:
                    reason = "expired"
                else:
                    continue
                del self._sessions[sid]
                evicted.append(sid)
                metrics.inc_session_evicted(reason)
        if evicted:
            log.info("evicted %d sessions", len(evicted))
        return evicted

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def stats(self) -> dict:
        with self._lock:
            return {
                "sessions": len(self._sessions),
                "turns": sum(len(s.turns) for s in self._sessions.values()),
            }


__all__ = ["SessionStore", "Session", "Turn", "USER", "ASSISTANT"]
