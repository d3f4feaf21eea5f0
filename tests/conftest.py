"""Pytest configuration ensuring project root is importable.

Adds repository root and src/ to sys.path explicitly to avoid
interpreter/path quirks when the package is not installed.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from core import metrics  # noqa: E402
from core.config import AggregatedConfig  # noqa: E402
from core.errors import CompletionFailed  # noqa: E402
from core.llm import ClientInfo, CompletionClient  # noqa: E402
from core.services import build_services  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_config_env():  # noqa: D401
    """Ensure global config/env/metrics side effects do not leak.

    - Clear aggregated config cache between tests
    - Restore PROFESSOR_CONFIG_DIR to original value
    - Reset in-memory metrics
    """
    from core.config import clear_config_cache  # local import

    prev = os.environ.get("PROFESSOR_CONFIG_DIR")
    clear_config_cache()
    metrics.reset_for_tests()
    try:
        yield
    finally:
        clear_config_cache()
        if prev is None:
            os.environ.pop("PROFESSOR_CONFIG_DIR", None)
        else:
            os.environ["PROFESSOR_CONFIG_DIR"] = prev


class StubClient(CompletionClient):
    """Echo-style client recording every call."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, list]] = []

    def complete(self, system_prompt, turns):  # noqa: D401
        self.calls.append((system_prompt, list(turns)))
        if self.fail:
            raise CompletionFailed("upstream overloaded")
        return f"reply {len(self.calls)}: {turns[-1].content}"

    def info(self):  # noqa: D401
        return ClientInfo(provider="stub", model="stub-model", max_tokens=16)


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def stub_client():
    return StubClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def services(stub_client, clock):
    return build_services(
        config=AggregatedConfig(), client=stub_client, clock=clock
    )


@pytest.fixture
def api(services):
    from fastapi.testclient import TestClient
    from professor.api.app import create_app

    return TestClient(create_app(services))
