"""Config subsystem public API.

Provides:
    get_config() -> AggregatedConfig (llm, sessions, server, logging)
    ConfigError  -> raised on validation / unknown key
"""

from .loader import (  # noqa: F401
    AggregatedConfig,
    get_config,
    ConfigError,
    clear_config_cache,
)


__all__ = [
    "AggregatedConfig",
    "get_config",
    "ConfigError",
    "clear_config_cache",
]
