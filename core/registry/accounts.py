"""In-memory teacher / class / student tables.

Lookups by email and join code are linear scans; fine for a single
classroom deployment. Validation runs before any table is touched.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Dict, List

from core.errors import Conflict, InvalidRequest, NotFound, Unauthorized
from .records import (
    DEFAULT_SUBJECT,
    DEFAULT_TOPIC,
    ActivityRecord,
    ClassRoom,
    Student,
    Teacher,
    generate_id,
    generate_join_code,
    now_iso,
)

log = logging.getLogger("professor.registry")


def _blank(v: str | None) -> bool:
    return v is None or not str(v).strip()


class Registry:
    def __init__(self) -> None:
        self._teachers: Dict[str, Teacher] = {}
        self._classes: Dict[str, ClassRoom] = {}
        self._students: Dict[str, Student] = {}
        self._lock = RLock()

    # --- teachers ---------------------------------------------------------
    def register_teacher(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        school: str | None = None,
    ) -> Teacher:
        if _blank(name) or _blank(email) or _blank(password):
            raise InvalidRequest("Name, email, and password are required")
        with self._lock:
            if any(t.email == email for t in self._teachers.values()):
                raise Conflict("Email already registered")
            teacher = Teacher(
                id=generate_id("teacher"),
                name=name,
                email=email,
                password=password,
                school=school or "",
            )
            self._teachers[teacher.id] = teacher
        log.info("teacher registered id=%s", teacher.id)
        return teacher

    def authenticate(self, email: str | None, password: str | None) -> Teacher:
        with self._lock:
            for t in self._teachers.values():
                if t.email == email and t.password == password:
                    return t
        raise Unauthorized("Invalid email or password")

    def get_teacher(self, teacher_id: str) -> Teacher:
        with self._lock:
            t = self._teachers.get(teacher_id)
        if t is None:
            raise NotFound("Teacher not found")
        return t

    # --- classes ----------------------------------------------------------
    def create_class(
        self,
        teacher_id: str | None,
        class_name: str | None,
        subject: str | None = None,
        description: str | None = None,
    ) -> ClassRoom:
        if _blank(teacher_id) or _blank(class_name):
            raise InvalidRequest("Teacher id and class name are required")
        with self._lock:
            teacher = self._teachers.get(teacher_id)
            if teacher is None:
                raise NotFound("Teacher not found")
            room = ClassRoom(
                id=generate_id("class"),
                teacher_id=teacher_id,
                name=class_name,
                join_code=generate_join_code(),
                subject=subject or DEFAULT_SUBJECT,
                description=description or "",
            )
            self._classes[room.id] = room
            teacher.classes.append(room.id)
        log.info("class created id=%s teacher=%s", room.id, teacher_id)
        return room

    def get_class(self, class_id: str) -> ClassRoom | None:
        with self._lock:
            return self._classes.get(class_id)

    def classes_for_teacher(self, teacher_id: str) -> List[Dict[str, Any]]:
        with self._lock:
            teacher = self.get_teacher(teacher_id)
            out = []
            for cid in teacher.classes:
                room = self._classes.get(cid)
                if room is None:
                    continue
                view = room.public()
                view["studentCount"] = len(room.students)
                view["recentActivity"] = len(room.conversations)
                out.append(view)
            return out

    def students_for_teacher(self, teacher_id: str) -> List[Dict[str, Any]]:
        with self._lock:
            teacher = self.get_teacher(teacher_id)
            out = []
            for cid in teacher.classes:
                room = self._classes.get(cid)
                if room is None:
                    continue
                for sid in room.students:
                    student = self._students.get(sid)
                    if student is None:
                        continue
                    view = student.public()
                    view["className"] = room.name
                    out.append(view)
            return out

    # --- students ---------------------------------------------------------
    def join_class(
        self, join_code: str | None, student_name: str | None
    ) -> tuple[Student, ClassRoom]:
        if _blank(join_code) or _blank(student_name):
            raise InvalidRequest("Join code and student name are required")
        code = join_code.strip().upper()
        with self._lock:
            room = next(
                (c for c in self._classes.values() if c.join_code == code),
                None,
            )
            if room is None:
                raise NotFound("Invalid join code")
            student = Student(
                id=generate_id("student"),
                name=student_name,
                class_id=room.id,
            )
            self._students[student.id] = student
            room.students.append(student.id)
        log.info("student joined id=%s class=%s", student.id, room.id)
        return student, room

    def get_student(self, student_id: str) -> Student | None:
        with self._lock:
            return self._students.get(student_id)

    def record_activity(
        self,
        student_id: str,
        session_id: str,
        topic_title: str | None,
        message_count: int,
    ) -> bool:
        """Bump student counters and log the exchange on the class.

        Returns False without touching anything when the student id does
        not resolve; a dangling class id still updates the student.
        """
        with self._lock:
            student = self._students.get(student_id)
            if student is None:
                return False
            student.conversation_count += 1
            student.last_activity = now_iso()
            room = self._classes.get(student.class_id)
            if room is not None:
                room.conversations.append(
                    ActivityRecord(
                        session_id=session_id,
                        student_id=student_id,
                        prompt_title=topic_title or DEFAULT_TOPIC,
                        message_count=message_count,
                    )
                )
            return True

    # --- views ------------------------------------------------------------
    def snapshot(self) -> tuple[List[Teacher], List[ClassRoom], List[Student]]:
        with self._lock:
            return (
                list(self._teachers.values()),
                list(self._classes.values()),
                list(self._students.values()),
            )

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {
                "teachers": len(self._teachers),
                "classes": len(self._classes),
                "students": len(self._students),
            }


__all__ = ["Registry"]
