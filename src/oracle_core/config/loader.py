"""Config loader — reads YAML, applies ORACLE_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from oracle_core.config.schema import AppConfig

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "ORACLE_DATABASE_URL": ("database", "url"),
    "ORACLE_LOG_LEVEL": ("logging", "level"),
    "ORACLE_LOG_FORMAT": ("logging", "format"),
    "ORACLE_API_PORT": ("api", "port"),
    "ORACLE_WEATHER_API_KEY": ("weather", "api_key"),
    "ORACLE_LLM_API_KEY": ("llm", "api_key"),
    "ORACLE_LLM_MODEL": ("llm", "model_id"),
    "ORACLE_X_ACCESS_TOKEN": ("x", "access_token"),
    "ORACLE_CRON_SECRET": ("cron", "secret"),
}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Secrets are normally supplied only through the environment:
        ORACLE_WEATHER_API_KEY  -> weather.api_key
        ORACLE_LLM_API_KEY      -> llm.api_key
        ORACLE_X_ACCESS_TOKEN   -> x.access_token
        ORACLE_CRON_SECRET      -> cron.secret
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data.setdefault(section, {})[key] = value

    return AppConfig.model_validate(data)
