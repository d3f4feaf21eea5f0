"""Central error taxonomy.

Every failure that crosses a component boundary is a ``ProfessorError``
subclass carrying a taxonomy ``code`` and the HTTP ``status`` the API layer
maps it to. Codes form a closed set; ``validate_error_type`` enforces it.
"""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # request
    "invalid-request",
    "not-found",
    "unauthorized",
    "conflict",
    # chat round trip
    "provider-error",
    "chat-failed",
    # infra
    "internal",
    "event-handler-error",
    # config
    "config-out-of-range",
    "config-invalid",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


class ProfessorError(Exception):
    """Base error; subclasses pin ``code`` and ``status``."""

    code = "internal"
    status = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidRequest(ProfessorError):
    """Required field missing or empty."""

    code = "invalid-request"
    status = 400


class NotFound(ProfessorError):
    code = "not-found"
    status = 404


class Unauthorized(ProfessorError):
    code = "unauthorized"
    status = 401


class Conflict(ProfessorError):
    """Duplicate registration.

    Reported as 400 to stay wire-compatible with existing front ends.
    """

    code = "conflict"
    status = 400


class CompletionFailed(ProfessorError):
    """Provider round trip failed (transport, status or body shape).

    ``message`` keeps the provider detail for logs; callers never echo it.
    """

    code = "provider-error"
    status = 500


class ChatFailed(ProfessorError):
    code = "chat-failed"
    status = 500


class InternalError(ProfessorError):
    code = "internal"
    status = 500


def map_exception(e: Exception) -> str:
    """Classify an arbitrary exception into a taxonomy code."""
    if isinstance(e, ProfessorError):
        return e.code
    name = e.__class__.__name__.lower()
    msg = str(e).lower()
    if "timeout" in name or "timeout" in msg:
        return "provider-error"
    if isinstance(e, (KeyError, LookupError)):
        return "not-found"
    if isinstance(e, (ValueError, TypeError)):
        return "invalid-request"
    return "internal"


__all__ = [
    "validate_error_type",
    "map_exception",
    "ProfessorError",
    "InvalidRequest",
    "NotFound",
    "Unauthorized",
    "Conflict",
    "CompletionFailed",
    "ChatFailed",
    "InternalError",
]
