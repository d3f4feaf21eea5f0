import pytest

from core import metrics
from core.config import ConfigError, clear_config_cache, get_config


def _write_config(tmp_path, monkeypatch, yaml_text: str):
    (tmp_path / "base.yaml").write_text(yaml_text, encoding="utf-8")
    monkeypatch.setenv("PROFESSOR_CONFIG_DIR", str(tmp_path))
    clear_config_cache()


def test_defaults_without_files(tmp_path, monkeypatch):
    monkeypatch.setenv("PROFESSOR_CONFIG_DIR", str(tmp_path / "missing"))
    cfg = get_config()
    assert cfg.llm.model == "claude-3-5-sonnet-20241022"
    assert cfg.llm.max_tokens == 1000
    assert cfg.sessions.max_age_s == 86400
    assert cfg.sessions.sweep_interval_s == 3600
    assert cfg.server.port == 3000


def test_valid_load_with_overrides(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        "llm:\n"
        "  model: test-model\n"
        "  base_url: https://proxy.local/\n"
        "sessions:\n"
        "  max_age_s: 120\n",
    )
    (tmp_path / "overrides.local.yaml").write_text(
        "sessions:\n  sweep_interval_s: 30\n", encoding="utf-8"
    )
    cfg = get_config()
    assert cfg.llm.model == "test-model"
    assert cfg.llm.base_url == "https://proxy.local"
    assert cfg.sessions.max_age_s == 120
    assert cfg.sessions.sweep_interval_s == 30


def test_env_override_wins(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "llm:\n  max_tokens: 200\n")
    monkeypatch.setenv("PROFESSOR__LLM__MAX_TOKENS", "321")
    monkeypatch.setenv("PROFESSOR__LOGGING__FORMAT", "text")
    cfg = get_config()
    assert cfg.llm.max_tokens == 321
    assert cfg.logging.format == "text"
    counters = metrics.snapshot()["counters"]
    assert counters["env_override_total{path=llm.max_tokens}"] == 1


def test_invalid_key_rejected(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "llm:\n  unknown_field: 123\n")
    with pytest.raises(ConfigError):
        get_config()


def test_out_of_range_rejected(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "sessions:\n  max_age_s: 0\n")
    with pytest.raises(ConfigError, match="config-out-of-range"):
        get_config()


def test_invalid_logging_level(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "logging:\n  level: loud\n")
    with pytest.raises(ConfigError):
        get_config()
