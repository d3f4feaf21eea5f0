"""System prompt composition."""
from __future__ import annotations

from pathlib import Path

from .persona import PRODUCTIVE_CHALLENGE_PROMPT

TOPIC_CONTEXT = (
    "\n\nCurrent Assignment Context: The student is working on \"{topic}\". "
    "Frame your responses to help them specifically with this type of "
    "analytical thinking."
)


def build_system_prompt(
    base_instructions: str, topic_title: str | None = None
) -> str:
    """Return ``base_instructions`` plus an assignment clause for the topic.

    Pure: identical inputs give identical output. Any non-empty topic is
    quoted exactly as given; a missing or empty topic passes the base text
    through unmodified.
    """
    if not topic_title:
        return base_instructions
    return base_instructions + TOPIC_CONTEXT.format(topic=topic_title)


def load_base_instructions(path: str | Path | None = None) -> str:
    """Base text from ``path`` when configured, else the built-in persona."""
    if not path:
        return PRODUCTIVE_CHALLENGE_PROMPT
    return Path(path).read_text(encoding="utf-8").strip()
