"""Anthropic Messages API client over httpx.

One POST per call, no retries. Transport errors, non-2xx statuses and
bodies without ``content[0].text`` all surface as ``CompletionFailed``
whose message keeps the provider detail for logs.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Sequence

import httpx

from core import metrics
from core.config.schemas.llm import LLMConfig
from core.errors import CompletionFailed
from core.sessions import Turn
from .client import ClientInfo, CompletionClient

log = logging.getLogger("professor.llm")

MESSAGES_PATH = "/v1/messages"


def _provider_error_detail(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = {}
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return f"API request failed: {resp.status_code}"


def extract_text(data: Any) -> str:
    """Pull ``content[0].text`` out of a Messages API response body."""
    try:
        text = data["content"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise CompletionFailed(f"malformed provider response: {e!r}") from e
    if not isinstance(text, str):
        raise CompletionFailed("malformed provider response: text not a string")
    return text


class AnthropicClient(CompletionClient):
    def __init__(
        self,
        api_key: str | None,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 1000,
        base_url: str = "https://api.anthropic.com",
        api_version: str = "2023-06-01",
        timeout_s: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.api_version = api_version
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_s,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        cfg: LLMConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "AnthropicClient":
        return cls(
            api_key=os.getenv(cfg.api_key_env),
            model=cfg.model,
            max_tokens=cfg.max_tokens,
            base_url=cfg.base_url,
            api_version=cfg.api_version,
            timeout_s=cfg.timeout_s,
            transport=transport,
        )

    def info(self) -> ClientInfo:
        return ClientInfo(
            provider="anthropic", model=self.model, max_tokens=self.max_tokens
        )

    def build_payload(
        self, system_prompt: str, turns: Sequence[Turn]
    ) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [t.as_message() for t in turns]
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": system_prompt,
            "messages": messages,
        }

    def complete(self, system_prompt: str, turns: Sequence[Turn]) -> str:
        if not self._api_key:
            metrics.inc_completion("error")
            raise CompletionFailed("provider API key is not configured")
        headers = {
            "content-type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": self.api_version,
        }
        t0 = time.time()
        try:
            resp = self._http.post(
                MESSAGES_PATH,
                json=self.build_payload(system_prompt, turns),
                headers=headers,
            )
        except httpx.HTTPError as e:
            metrics.inc_completion("error")
            raise CompletionFailed(f"transport error: {e}") from e
        finally:
            metrics.observe(
                "completion_latency_ms", (time.time() - t0) * 1000.0
            )
        if not resp.is_success:
            metrics.inc_completion("error")
            raise CompletionFailed(_provider_error_detail(resp))
        try:
            data = resp.json()
        except ValueError as e:
            metrics.inc_completion("error")
            raise CompletionFailed("provider returned non-JSON body") from e
        try:
            text = extract_text(data)
        except CompletionFailed:
            metrics.inc_completion("error")
            raise
        metrics.inc_completion("ok")
        log.debug(
            "completion ok model=%s turns=%d", self.model, len(turns)
        )
        return text

    def close(self) -> None:
        self._http.close()


__all__ = ["AnthropicClient", "extract_text"]
