"""Cache-aside access to order book snapshots."""

from __future__ import annotations

import logging
from typing import Any, Awaitable

from pydantic import ValidationError

from ..cache.base import CacheStore
from ..connectors.base import ExchangeClient
from ..constants import ORDER_BOOK_KEY_PREFIX
from ..domain import OrderBook, Symbol
from ..errors import InternalError
from ..settings import settings

logger = logging.getLogger(__name__)


async def discard_with_logging(operation: Awaitable[Any], message: str, *args: Any) -> None:
    """Await ``operation`` and log, instead of raise, whatever it fails with.

    Used for best-effort side effects whose failure must not fail the caller.
    """

    try:
        await operation
    except Exception:
        logger.exception(message, *args)


class OrderBookCache:
    """Serve snapshots from the cache store, falling back to the exchange.

    Snapshots expire inside the store; nothing is tracked locally.
    """

    def __init__(
        self,
        client: ExchangeClient,
        store: CacheStore,
        *,
        ttl_seconds: int | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.order_book_ttl

    @staticmethod
    def build_key(symbol: Symbol) -> str:
        return f"{ORDER_BOOK_KEY_PREFIX}{symbol}"

    async def get_cached(self, symbol: Symbol) -> OrderBook | None:
        """Return the cached snapshot, ``None`` on a miss.

        A value that is present but does not parse is an error, not a miss.
        """

        raw = await self._store.get(self.build_key(symbol))
        if raw is None:
            return None
        try:
            return OrderBook.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Failed to deserialize cached order book for %s: %s", symbol, exc)
            raise InternalError.wrap(exc, f"Corrupted cached order book for {symbol}") from exc

    async def put(self, symbol: Symbol, book: OrderBook) -> None:
        await self._store.set_with_expiry(self.build_key(symbol), book.model_dump_json(), self._ttl)

    async def get_order_book(self, symbol: Symbol) -> OrderBook:
        cached = await self.get_cached(symbol)
        if cached is not None:
            return cached

        book = await self._client.get_order_book(symbol)
        await discard_with_logging(
            self.put(symbol, book),
            "Failed to save order book for %s",
            symbol,
        )
        return book
