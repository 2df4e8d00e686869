"""External service clients."""

from oracle_core.clients.coingecko import CoinGeckoClient
from oracle_core.clients.llm import ChatCompletionClient
from oracle_core.clients.swpc import SwpcClient
from oracle_core.clients.weatherapi import WeatherApiClient
from oracle_core.clients.x import XClient

__all__ = ["ChatCompletionClient", "CoinGeckoClient", "SwpcClient", "WeatherApiClient", "XClient"]
