from __future__ import annotations

from typing import Protocol, Sequence

from ..domain import ExchangeSymbol, LastPrice, OrderBook, Symbol


class ExchangeClient(Protocol):
    """Read-only market data source used by the registry and the services.

    Implementations raise :class:`~depth_scanner.errors.InternalError` on any
    transport, status or payload failure.
    """

    async def get_last_price(self, symbol: Symbol) -> LastPrice:
        ...

    async def get_order_book(self, symbol: Symbol) -> OrderBook:
        ...

    async def get_exchange_info(self) -> Sequence[ExchangeSymbol]:
        ...
