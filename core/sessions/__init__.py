"""Conversation state: store + periodic sweeper."""
from __future__ import annotations

from .store import ASSISTANT, USER, Session, SessionStore, Turn  # noqa: F401
from .sweeper import SessionSweeper  # noqa: F401

__all__ = [
    "SessionStore",
    "Session",
    "Turn",
    "USER",
    "ASSISTANT",
    "SessionSweeper",
]
