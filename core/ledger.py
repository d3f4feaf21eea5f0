"""Activity ledger: derived, best-effort usage counters.

Fed by chat exchange events on the bus; never consulted by the exchange
itself. Counts may drift from the primary tables after partial failures
(e.g. a student id that no longer resolves) and that is acceptable.

Keyed counters (class, teacher, topic, day) are bounded by registry rows
and calendar days; nothing is keyed by session id, so session eviction
leaves the ledger size unchanged.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List

from core.eventbus import CHAT_EXCHANGE_COMPLETED, CHAT_EXCHANGE_FAILED, EventBus
from core.registry import Registry
from core.registry.records import DEFAULT_TOPIC
from core.sessions import SessionStore

log = logging.getLogger("professor.ledger")

TOP_TEACHERS = 5
TOP_TOPICS = 10


def _day(ts: float | None) -> str:
    dt = (
        datetime.fromtimestamp(ts, tz=timezone.utc)
        if ts is not None
        else datetime.now(timezone.utc)
    )
    return dt.date().isoformat()


class ActivityLedger:
    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._lock = RLock()
        self.exchanges = 0
        self.failed = 0
        self.by_class: Counter[str] = Counter()
        self.by_teacher: Counter[str] = Counter()
        self.by_topic: Counter[str] = Counter()
        self.by_day: Counter[str] = Counter()

    def attach(self, bus: EventBus) -> "ActivityLedger":
        bus.subscribe(CHAT_EXCHANGE_COMPLETED, self.on_completed)
        bus.subscribe(CHAT_EXCHANGE_FAILED, self.on_failed)
        return self

    def on_completed(self, payload: Dict[str, Any]) -> None:
        session_id = payload["session_id"]
        student_id = payload.get("student_id")
        topic = payload.get("topic_title") or DEFAULT_TOPIC
        with self._lock:
            self.exchanges += 1
            self.by_topic[topic] += 1
            self.by_day[_day(payload.get("ts"))] += 1
        if not student_id:
            return
        recorded = self._registry.record_activity(
            student_id,
            session_id,
            payload.get("topic_title"),
            int(payload.get("message_count") or 0),
        )
        if not recorded:
            log.debug("activity skipped: unknown student %s", student_id)
            return
        student = self._registry.get_student(student_id)
        room = self._registry.get_class(student.class_id) if student else None
        if room is None:
            return
        with self._lock:
            self.by_class[room.id] += 1
            self.by_teacher[room.teacher_id] += 1

    def on_failed(self, payload: Dict[str, Any]) -> None:
        with self._lock:
            self.failed += 1

    def counters(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "totalExchanges": self.exchanges,
                "totalMessages": self.exchanges * 2,
                "failedExchanges": self.failed,
                "dailyActivity": dict(sorted(self.by_day.items())),
            }

    def popular_topics(self, limit: int = TOP_TOPICS) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                {"title": title, "count": n}
                for title, n in self.by_topic.most_common(limit)
            ]

    def analytics_view(self, store: SessionStore) -> Dict[str, Any]:
        """Admin dashboard payload.

        Roster figures come from the registry; conversation figures come
        from the ledger's class / teacher counters.
        """
        teachers, classes, _ = self._registry.snapshot()
        totals = self._registry.counts()
        with self._lock:
            by_class = Counter(self.by_class)
            by_teacher = Counter(self.by_teacher)

        subject_stats: Dict[str, Dict[str, int]] = {}
        students_per_teacher: Counter[str] = Counter()
        for room in classes:
            s = subject_stats.setdefault(
                room.subject, {"classes": 0, "students": 0, "conversations": 0}
            )
            s["classes"] += 1
            s["students"] += len(room.students)
            s["conversations"] += by_class[room.id]
            students_per_teacher[room.teacher_id] += len(room.students)

        ranked = sorted(teachers, key=lambda t: by_teacher[t.id], reverse=True)
        top_teachers = [
            {
                "teacherId": t.id,
                "name": t.name,
                "school": t.school,
                "classCount": len(t.classes),
                "studentCount": students_per_teacher[t.id],
                "conversations": by_teacher[t.id],
            }
            for t in ranked[:TOP_TEACHERS]
        ]

        return {
            "overview": {
                "totalTeachers": totals["teachers"],
                "totalClasses": totals["classes"],
                "totalStudents": totals["students"],
                "activeSessions": store.stats()["sessions"],
                "totalConversations": sum(by_class.values()),
            },
            "analytics": self.counters(),
            "subjectStats": subject_stats,
            "topTeachers": top_teachers,
            "popularTopics": self.popular_topics(),
        }


__all__ = ["ActivityLedger"]
