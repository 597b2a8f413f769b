"""Registry of tradable symbols and the loop that keeps it fresh."""

from __future__ import annotations

import asyncio
import logging
from typing import AbstractSet, Iterable

from ..connectors.base import ExchangeClient
from ..constants import TRADING_STATUS
from ..domain import ExchangeSymbol, Symbol
from ..errors import SymbolNotFound, UnsupportedSymbol
from ..settings import settings

logger = logging.getLogger(__name__)


def _extract_tradable_symbols(items: Iterable[ExchangeSymbol], quote_asset: str) -> set[Symbol]:
    out: set[Symbol] = set()
    for item in items:
        if item.status != TRADING_STATUS:
            continue
        if not item.symbol.endswith(quote_asset):
            continue
        out.add(item.symbol)
    return out


class SymbolRegistry:
    """Set of symbols that are valid for depth requests.

    The set only grows: a refresh merges the currently trading symbols into
    it and never drops a symbol, so a delisted pair stays valid until the
    process restarts.

    The set is replaced as a whole on every refresh, so a reader holds
    either the previous or the next snapshot and never a half-merged one.
    :meth:`refresh` is the only writer.
    """

    def __init__(
        self,
        client: ExchangeClient,
        *,
        quote_asset: str | None = None,
        unsupported: Iterable[Symbol] | None = None,
    ) -> None:
        self._client = client
        self._quote_asset = (quote_asset or settings.quote_asset).upper()
        if unsupported is None:
            unsupported = settings.unsupported_symbols
        self._unsupported = frozenset(symbol.upper() for symbol in unsupported)
        self._symbols: frozenset[Symbol] = frozenset()

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def snapshot(self) -> AbstractSet[Symbol]:
        return self._symbols

    def normalize(self, raw: str) -> Symbol:
        symbol = raw.strip().upper()
        if not symbol.endswith(self._quote_asset):
            symbol = f"{symbol}{self._quote_asset}"
        return symbol

    def validate(self, raw: str) -> Symbol:
        symbol = self.normalize(raw)
        # denylist wins over registry membership
        if symbol in self._unsupported:
            raise UnsupportedSymbol(symbol)
        if symbol not in self._symbols:
            raise SymbolNotFound(symbol)
        return symbol

    async def refresh(self) -> int:
        """Merge the exchange's tradable symbols in; return how many were new.

        Exchange failures propagate and leave the current set untouched.
        """

        items = await self._client.get_exchange_info()
        fresh = _extract_tradable_symbols(items, self._quote_asset)
        current = self._symbols
        added = fresh - current
        self._symbols = current | fresh
        logger.info(
            "Exchange symbols refreshed: %d new, %d total", len(added), len(self._symbols)
        )
        return len(added)


async def poll_symbols_loop(registry: SymbolRegistry, *, interval: float) -> None:
    """Refresh ``registry`` now and then every ``interval`` seconds, forever."""

    logger.info("Starting exchange symbols refresh loop, interval %ss", interval)
    while True:
        try:
            await registry.refresh()
        except Exception:
            logger.exception("Failed to refresh exchange symbols, keeping %d known", len(registry))
        await asyncio.sleep(interval)
