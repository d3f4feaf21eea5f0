from __future__ import annotations

from .composer import build_system_prompt, load_base_instructions  # noqa: F401
from .library import (  # noqa: F401
    DEFAULT_SUBJECT,
    get_prompts,
    resolve_subject,
)
from .persona import PRODUCTIVE_CHALLENGE_PROMPT  # noqa: F401

__all__ = [
    "build_system_prompt",
    "load_base_instructions",
    "get_prompts",
    "resolve_subject",
    "DEFAULT_SUBJECT",
    "PRODUCTIVE_CHALLENGE_PROMPT",
]
