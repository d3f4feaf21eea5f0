"""Account records: teachers, classes, students.

Records link by id only. Public views (``public()``) use the camelCase keys
the browser front ends expect and never include the credential.
"""
from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

_ID_ALPHABET = string.ascii_lowercase + string.digits
JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits
JOIN_CODE_LENGTH = 6
DEFAULT_SUBJECT = "general"
DEFAULT_TOPIC = "General Discussion"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def generate_id(prefix: str) -> str:
    """``<prefix>_<epoch ms>_<9 random base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def generate_join_code() -> str:
    # Uniqueness is not enforced; duplicates resolve to the first match.
    return "".join(
        secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH)
    )


@dataclass(slots=True)
class Teacher:
    id: str
    name: str
    email: str
    password: str  # plaintext; never deploy as-is
    school: str = ""
    created_at: str = field(default_factory=now_iso)
    classes: List[str] = field(default_factory=list)

    def public(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "school": self.school,
        }


@dataclass(slots=True)
class ActivityRecord:
    session_id: str
    student_id: str
    prompt_title: str
    message_count: int
    timestamp: str = field(default_factory=now_iso)

    def public(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "studentId": self.student_id,
            "timestamp": self.timestamp,
            "promptTitle": self.prompt_title,
            "messageCount": self.message_count,
        }


@dataclass(slots=True)
class ClassRoom:
    id: str
    teacher_id: str
    name: str
    join_code: str
    subject: str = DEFAULT_SUBJECT
    description: str = ""
    created_at: str = field(default_factory=now_iso)
    students: List[str] = field(default_factory=list)
    conversations: List[ActivityRecord] = field(default_factory=list)

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "subject": self.subject,
            "description": self.description,
        }

    def public(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "teacherId": self.teacher_id,
            "name": self.name,
            "subject": self.subject,
            "description": self.description,
            "joinCode": self.join_code,
            "createdAt": self.created_at,
            "students": list(self.students),
            "conversations": [c.public() for c in self.conversations],
        }


@dataclass(slots=True)
class Student:
    id: str
    name: str
    class_id: str
    joined_at: str = field(default_factory=now_iso)
    conversation_count: int = 0
    last_activity: str | None = None

    def public(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "classId": self.class_id,
            "joinedAt": self.joined_at,
            "conversationCount": self.conversation_count,
            "lastActivity": self.last_activity,
        }
