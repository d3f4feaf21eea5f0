"""Configuration loading & validation.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV (PROFESSOR__*).

Each section is validated by its own schema (``core.config.schemas.*``);
unknown keys are rejected at every level.
"""
from __future__ import annotations

import logging
import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict

import yaml
from core import metrics
from core.errors import validate_error_type
from pydantic import BaseModel, ConfigDict, ValidationError

from .schemas.llm import LLMConfig
from .schemas.core import ServerConfig, SessionsConfig
from .schemas.observability import LoggingConfig


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    llm: LLMConfig = LLMConfig()
    sessions: SessionsConfig = SessionsConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
CONFIG_DIR_ENV = "PROFESSOR_CONFIG_DIR"
ENV_PREFIX = "PROFESSOR__"

log = logging.getLogger("professor.config")


class ConfigError(Exception):
    pass


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name}: top level must be a mapping")
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        target[path_parts[-1]] = _cast_env_value(value)
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        log.info("config env override path=%s source=env", dotted_path)


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))


def _positive(raw: Dict[str, Any], section: str, key: str) -> bool:
    val = (raw.get(section) or {}).get(key)
    if val is None:
        return True
    try:
        return float(val) > 0
    except (TypeError, ValueError):
        # Type errors are reported by the schema itself
        return True


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Bounds validation across sections.

    Emits metrics on violations and raises ConfigError if any hard errors.
      - llm.max_tokens > 0
      - llm.timeout_s > 0
      - sessions.max_age_s > 0
      - sessions.sweep_interval_s > 0
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    for section, key in (
        ("llm", "max_tokens"),
        ("llm", "timeout_s"),
        ("sessions", "max_age_s"),
        ("sessions", "sweep_interval_s"),
    ):
        if not _positive(raw, section, key):
            errors.append(
                (f"{section}.{key}", "config-out-of-range", ">0 required")
            )

    if errors:
        for path, code, _ in errors:
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
            validate_error_type(code)
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        _normalize_and_validate(merged)
        try:
            return AggregatedConfig.model_validate(merged)
        except ValidationError as e:
            metrics.inc(
                "config_validation_errors_total",
                {"path": "schema", "code": "config-invalid"},
            )
            raise ConfigError(str(e)) from e


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()
