"""Teacher / class / enrollment registry."""

from .accounts import Registry  # noqa: F401
from .records import (  # noqa: F401
    ActivityRecord,
    ClassRoom,
    Student,
    Teacher,
    JOIN_CODE_LENGTH,
)

__all__ = [
    "Registry",
    "Teacher",
    "ClassRoom",
    "Student",
    "ActivityRecord",
    "JOIN_CODE_LENGTH",
]
