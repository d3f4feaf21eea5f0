"""Chat exchange orchestration.

Session states: EMPTY → AWAITING_REPLY (user turn appended) → STABLE
(assistant turn appended). A failed completion leaves the session in
AWAITING_REPLY; there is no rollback and no retry. Exchanges on the same
session id are not serialized against each other.
"""
from __future__ import annotations

import logging

from core import metrics
from core.errors import (
    ChatFailed,
    CompletionFailed,
    InvalidRequest,
    map_exception,
)
from core.eventbus import CHAT_EXCHANGE_COMPLETED, CHAT_EXCHANGE_FAILED, EventBus
from core.llm import CompletionClient
from core.prompts import PRODUCTIVE_CHALLENGE_PROMPT, build_system_prompt
from core.sessions import ASSISTANT, USER, SessionStore

log = logging.getLogger("professor.chat")


class ChatService:
    def __init__(
        self,
        store: SessionStore,
        client: CompletionClient,
        bus: EventBus,
        base_instructions: str = PRODUCTIVE_CHALLENGE_PROMPT,
    ) -> None:
        self.store = store
        self.client = client
        self.bus = bus
        self.base_instructions = base_instructions

    def exchange(
        self,
        session_id: str | None,
        message: str | None,
        topic_title: str | None = None,
        student_id: str | None = None,
    ) -> str:
        if not message or not session_id:
            metrics.inc_chat_exchange("invalid")
            raise InvalidRequest("Message and sessionId are required")

        self.store.get_or_create(session_id)
        self.store.append(session_id, self.store.turn(USER, message))
        system_prompt = build_system_prompt(self.base_instructions, topic_title)
        turns = self.store.history(session_id)

        try:
            reply = self.client.complete(system_prompt, turns)
        except Exception as e:  # any client fault fails the exchange
            code = map_exception(e)
            metrics.inc_chat_exchange("failed")
            if isinstance(e, CompletionFailed):
                log.error(
                    "completion failed session=%s code=%s detail=%s",
                    session_id,
                    code,
                    e.message,
                )
            else:
                log.exception(
                    "completion client crashed session=%s code=%s",
                    session_id,
                    code,
                )
            self.bus.emit(
                CHAT_EXCHANGE_FAILED,
                {
                    "session_id": session_id,
                    "student_id": student_id,
                    "topic_title": topic_title,
                    "error": code,
                },
            )
            raise ChatFailed("Failed to process message") from e

        size = self.store.append(session_id, self.store.turn(ASSISTANT, reply))
        metrics.inc_chat_exchange("ok")
        self.bus.emit(
            CHAT_EXCHANGE_COMPLETED,
            {
                "session_id": session_id,
                "student_id": student_id,
                "topic_title": topic_title,
                "message_count": size,
            },
        )
        return reply

    def clear(self, session_id: str | None) -> None:
        if session_id:
            self.store.clear(session_id)


__all__ = ["ChatService"]
