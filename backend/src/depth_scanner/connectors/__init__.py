"""Exchange connectors."""

from .base import ExchangeClient
from .binance import BinanceSpotClient

__all__ = ["ExchangeClient", "BinanceSpotClient"]
