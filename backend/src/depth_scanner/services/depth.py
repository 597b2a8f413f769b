"""Aggregation service: the two operations the front-end calls."""

from __future__ import annotations

import logging
import time
from decimal import Decimal

from ..connectors.base import ExchangeClient
from ..domain import FilteredOrderBook, Symbol
from ..engine.depth_filter import build_filtered_order_book
from .order_book_cache import OrderBookCache
from .symbols import SymbolRegistry

logger = logging.getLogger(__name__)


class DepthService:
    def __init__(
        self,
        *,
        client: ExchangeClient,
        registry: SymbolRegistry,
        cache: OrderBookCache,
    ) -> None:
        self._client = client
        self._registry = registry
        self._cache = cache

    @property
    def registry(self) -> SymbolRegistry:
        return self._registry

    def validate_symbol(self, raw: str) -> Symbol:
        return self._registry.validate(raw)

    async def get_filtered_order_book(self, symbol: Symbol, depth_percent: Decimal) -> FilteredOrderBook:
        """Live price plus (possibly cached) book, filtered on both sides.

        Failures of either fetch propagate unchanged; there is no partial
        result.
        """

        started = time.perf_counter()
        # price is always live, only the book may come from the cache
        last_price = await self._client.get_last_price(symbol)
        book = await self._cache.get_order_book(symbol)
        result = build_filtered_order_book(symbol, book, last_price.price, depth_percent)
        logger.debug(
            "Filtered order book for %s at %s%% in %.3fs: %d asks, %d bids",
            symbol,
            depth_percent,
            time.perf_counter() - started,
            len(result.asks),
            len(result.bids),
        )
        return result
