"""Completion client abstraction layer exports.

No built-in dummy client. Tests implement their own lightweight stub or
drive ``AnthropicClient`` through ``httpx.MockTransport``.
"""

from .client import ClientInfo, CompletionClient  # noqa: F401
from .anthropic_client import AnthropicClient, extract_text  # noqa: F401

__all__ = ["CompletionClient", "ClientInfo", "AnthropicClient", "extract_text"]
