"""Core/system schemas: sessions, server."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, ConfigDict


class SessionsConfig(BaseModel):
    max_age_s: int = 24 * 60 * 60
    sweep_interval_s: int = 60 * 60

    model_config = ConfigDict(extra="forbid")


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    # Environment variable that overrides ``port`` (hosting platforms set it)
    port_env: str = "PORT"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    static_dir: str = "public"

    model_config = ConfigDict(extra="forbid")
