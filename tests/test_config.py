"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from oracle_core.config import AppConfig, load_config

EXAMPLE = Path(__file__).resolve().parent.parent / "config.yaml.example"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "ORACLE_DATABASE_URL",
        "ORACLE_LOG_LEVEL",
        "ORACLE_LOG_FORMAT",
        "ORACLE_API_PORT",
        "ORACLE_WEATHER_API_KEY",
        "ORACLE_LLM_API_KEY",
        "ORACLE_LLM_MODEL",
        "ORACLE_X_ACCESS_TOKEN",
        "ORACLE_CRON_SECRET",
    ):
        monkeypatch.delenv(var, raising=False)


class TestAppConfig:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.database.url == "sqlite:///resonance.db"
        assert cfg.logging.level == "INFO"
        assert cfg.logging.format == "json"
        assert cfg.weather.api_key is None
        assert cfg.llm.model_id == "gpt-4"
        assert cfg.x.max_replies_per_run == 2
        assert cfg.report.max_post_chars == 279
        assert cfg.coingecko.default_symbol == "$EVAA"

    def test_rejects_bad_types(self):
        with pytest.raises(ValidationError):
            AppConfig.model_validate({"x": {"max_replies_per_run": "many"}})


class TestLoadConfig:
    def test_load_example_config(self):
        cfg = load_config(EXAMPLE)
        assert cfg.weather.location == "auto:ip"
        assert cfg.api.port == 8000
        assert cfg.coingecko.history_days == 30
        assert cfg.x.handle == "AliceSoulAI"
        assert cfg.x.reply_pause_s == 3.0
        assert cfg.report.header.startswith("◇ EVAA PROTOCOL")
        assert cfg.cron.secret is None

    def test_load_nonexistent_file_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "missing.yaml")
        assert cfg == AppConfig()

    def test_load_none_returns_defaults(self):
        assert load_config(None) == AppConfig()

    def test_env_override_database_url(self, monkeypatch):
        monkeypatch.setenv("ORACLE_DATABASE_URL", "postgresql://oracle:oracle@db:5432/oracle")
        cfg = load_config(None)
        assert cfg.database.url == "postgresql://oracle:oracle@db:5432/oracle"

    def test_env_override_log_settings(self, monkeypatch):
        monkeypatch.setenv("ORACLE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ORACLE_LOG_FORMAT", "console")
        cfg = load_config(None)
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.format == "console"

    def test_env_override_api_port(self, monkeypatch):
        monkeypatch.setenv("ORACLE_API_PORT", "9100")
        assert load_config(None).api.port == 9100

    def test_env_supplies_secrets(self, monkeypatch):
        monkeypatch.setenv("ORACLE_WEATHER_API_KEY", "wk")
        monkeypatch.setenv("ORACLE_LLM_API_KEY", "lk")
        monkeypatch.setenv("ORACLE_LLM_MODEL", "gpt-4o")
        monkeypatch.setenv("ORACLE_X_ACCESS_TOKEN", "xt")
        monkeypatch.setenv("ORACLE_CRON_SECRET", "cs")
        cfg = load_config(EXAMPLE)
        assert cfg.weather.api_key == "wk"
        assert cfg.llm.api_key == "lk"
        assert cfg.llm.model_id == "gpt-4o"
        assert cfg.x.access_token == "xt"
        assert cfg.cron.secret == "cs"
        # Non-overridden values preserved
        assert cfg.x.handle == "AliceSoulAI"

    def test_empty_env_value_is_ignored(self, monkeypatch):
        monkeypatch.setenv("ORACLE_CRON_SECRET", "")
        assert load_config(None).cron.secret is None

    def test_load_minimal_yaml(self, tmp_path):
        p = tmp_path / "minimal.yaml"
        p.write_text("x:\n  handle: OtherOracle\n")
        cfg = load_config(p)
        assert cfg.x.handle == "OtherOracle"
        # Defaults still apply for unspecified sections
        assert cfg.database.url == "sqlite:///resonance.db"
        assert cfg.x.max_replies_per_run == 2
