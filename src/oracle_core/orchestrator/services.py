"""Collaborator bundle built from config."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from oracle_core.clients import (
    ChatCompletionClient,
    CoinGeckoClient,
    SwpcClient,
    WeatherApiClient,
    XClient,
)
from oracle_core.config.schema import AppConfig
from oracle_core.logging import get_logger

log = get_logger(__name__)


@dataclass
class OracleServices:
    """External collaborators for one process.

    Optional clients are None when their credential is not configured; the
    pipelines treat that as the documented degrade path.
    """

    config: AppConfig
    coingecko: CoinGeckoClient
    swpc: SwpcClient
    weather: WeatherApiClient | None = None
    llm: ChatCompletionClient | None = None
    x: XClient | None = None
    rng: random.Random = field(default_factory=random.Random)

    async def close(self) -> None:
        for client in (self.coingecko, self.swpc, self.weather, self.llm, self.x):
            if client is not None:
                await client.close()


def build_services(config: AppConfig) -> OracleServices:
    weather = None
    if config.weather.api_key:
        weather = WeatherApiClient(
            api_key=config.weather.api_key,
            base_url=config.weather.base_url,
            location=config.weather.location,
        )
    else:
        log.warning("weather_key_missing", detail="lunar readings will use the fallback signal")

    llm = None
    if config.llm.api_key:
        llm = ChatCompletionClient(
            api_key=config.llm.api_key,
            model_id=config.llm.model_id,
            api_endpoint=config.llm.api_endpoint,
            max_tokens=config.llm.max_tokens,
            temperature=config.llm.temperature,
        )
    else:
        log.warning("llm_key_missing", detail="reports will use the template narrative")

    x = None
    if config.x.access_token:
        x = XClient(access_token=config.x.access_token, base_url=config.x.base_url)
    else:
        log.warning("x_credentials_missing")

    return OracleServices(
        config=config,
        coingecko=CoinGeckoClient(base_url=config.coingecko.base_url),
        swpc=SwpcClient(base_url=config.swpc.base_url),
        weather=weather,
        llm=llm,
        x=x,
    )
