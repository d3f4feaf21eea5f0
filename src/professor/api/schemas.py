"""Request bodies.

Every field is optional at the schema level: presence is checked by the
domain layer so a missing field maps to a 400 with a readable message
instead of a schema error.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RegisterRequest(_Body):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    school: str | None = None


class LoginRequest(_Body):
    email: str | None = None
    password: str | None = None


class CreateClassRequest(_Body):
    teacher_id: str | None = Field(None, alias="teacherId")
    class_name: str | None = Field(None, alias="className")
    subject: str | None = None
    description: str | None = None


class JoinRequest(_Body):
    join_code: str | None = Field(None, alias="joinCode")
    student_name: str | None = Field(None, alias="studentName")


class ChatRequest(_Body):
    message: str | None = None
    session_id: str | None = Field(None, alias="sessionId")
    student_id: str | None = Field(None, alias="studentId")
    prompt_title: str | None = Field(None, alias="promptTitle")


class ClearRequest(_Body):
    session_id: str | None = Field(None, alias="sessionId")
