"""CompletionClient interface.

A client turns (system prompt, full turn history) into one reply text.
Implementations must raise ``core.errors.CompletionFailed`` for every
failure mode so the chat exchange sees a single error kind.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from core.sessions import Turn


@dataclass(frozen=True)
class ClientInfo:
    provider: str
    model: str
    max_tokens: int


class CompletionClient(ABC):
    @abstractmethod
    def complete(self, system_prompt: str, turns: Sequence[Turn]) -> str:
        """Return the assistant reply for the conversation so far."""

    @abstractmethod
    def info(self) -> ClientInfo:
        """Return static provider information."""

    def close(self) -> None:  # optional hook
        """Release transport resources (default no-op)."""
        return None
