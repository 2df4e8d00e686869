"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///resonance.db"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class WeatherConfig(BaseModel):
    """WeatherAPI astronomy feed. No api_key → lunar readings use the fallback signal."""

    base_url: str = "https://api.weatherapi.com/v1"
    api_key: str | None = None
    location: str = "auto:ip"


class SwpcConfig(BaseModel):
    base_url: str = "https://services.swpc.noaa.gov"


class CoinGeckoConfig(BaseModel):
    base_url: str = "https://api.coingecko.com/api/v3"
    history_days: int = 30
    default_coin_id: str = "evaa-protocol"
    default_symbol: str = "$EVAA"


class LLMConfig(BaseModel):
    """OpenAI-compatible chat completion endpoint."""

    api_endpoint: str = "https://api.openai.com/v1"
    api_key: str | None = None
    model_id: str = "gpt-4"
    max_tokens: int = 200
    temperature: float = 0.85


class XConfig(BaseModel):
    base_url: str = "https://api.x.com/2"
    access_token: str | None = None
    handle: str = "AliceSoulAI"
    max_replies_per_run: int = 2
    reply_memory_size: int = 100
    reply_pause_s: float = 3.0
    sync_max_results: int = 50


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class CronConfig(BaseModel):
    secret: str | None = None


class ReportConfig(BaseModel):
    header: str = "◇ EVAA PROTOCOL // EVAA — ACTIVE READ (Refined)"
    max_post_chars: int = 279
    layout: Literal["full", "compact"] = "full"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    swpc: SwpcConfig = Field(default_factory=SwpcConfig)
    coingecko: CoinGeckoConfig = Field(default_factory=CoinGeckoConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    x: XConfig = Field(default_factory=XConfig)
    cron: CronConfig = Field(default_factory=CronConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
