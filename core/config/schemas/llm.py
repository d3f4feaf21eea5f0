"""LLM provider config schema.

Only the outbound chat-completion call is configured here. The API key
itself never lives in YAML: ``api_key_env`` names the environment variable
that holds it.
"""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, ConfigDict


class LLMConfig(BaseModel):
    provider: str = Field("anthropic", pattern="^(anthropic)$")
    base_url: str = "https://api.anthropic.com"
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int = 1000
    api_version: str = "2023-06-01"
    api_key_env: str = "ANTHROPIC_API_KEY"
    timeout_s: float = 60.0
    # Optional file replacing the built-in base instructions
    system_prompt_path: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("base_url cannot be empty")
        return v.rstrip("/")
