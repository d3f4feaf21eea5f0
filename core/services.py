"""Service container.

Every process-wide store is built once here and handed to the API layer;
nothing else holds module-level state except the metrics collector and the
config cache.
"""
from __future__ import annotations

from dataclasses import dataclass
from time import time
from typing import Callable

from core.chat import ChatService
from core.config import AggregatedConfig, get_config
from core.eventbus import EventBus
from core.ledger import ActivityLedger
from core.llm import AnthropicClient, CompletionClient
from core.prompts import load_base_instructions
from core.registry import Registry
from core.sessions import SessionStore, SessionSweeper


@dataclass
class Services:
    config: AggregatedConfig
    sessions: SessionStore
    sweeper: SessionSweeper
    registry: Registry
    bus: EventBus
    ledger: ActivityLedger
    client: CompletionClient
    chat: ChatService

    def start(self) -> None:
        self.sweeper.start()

    def stop(self) -> None:
        self.sweeper.stop()
        self.client.close()


def build_services(
    config: AggregatedConfig | None = None,
    client: CompletionClient | None = None,
    clock: Callable[[], float] = time,
) -> Services:
    cfg = config or get_config()
    sessions = SessionStore(clock=clock)
    sweeper = SessionSweeper(
        sessions,
        max_age_s=cfg.sessions.max_age_s,
        interval_s=cfg.sessions.sweep_interval_s,
        clock=clock,
    )
    registry = Registry()
    bus = EventBus()
    ledger = ActivityLedger(registry).attach(bus)
    client = client or AnthropicClient.from_config(cfg.llm)
    chat = ChatService(
        sessions,
        client,
        bus,
        base_instructions=load_base_instructions(cfg.llm.system_prompt_path),
    )
    return Services(
        config=cfg,
        sessions=sessions,
        sweeper=sweeper,
        registry=registry,
        bus=bus,
        ledger=ledger,
        client=client,
        chat=chat,
    )


__all__ = ["Services", "build_services"]
