from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field

Symbol = str  # "SOLUSDT"


class Side(str, Enum):
    ASK = "ask"
    BID = "bid"


class OrderBookEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: Decimal
    quantity: Decimal


class OrderBook(BaseModel):
    """Raw snapshot as served by the exchange.

    Entries keep the exchange order; duplicated price levels are possible and
    are left as is.
    """

    asks: list[OrderBookEntry] = Field(default_factory=list)
    bids: list[OrderBookEntry] = Field(default_factory=list)

    @classmethod
    def from_levels(
        cls,
        *,
        asks: Iterable[Sequence[str | Decimal]],
        bids: Iterable[Sequence[str | Decimal]],
    ) -> "OrderBook":
        """Build a book from ``[price, quantity]`` pairs."""

        def _entries(levels: Iterable[Sequence[str | Decimal]]) -> list[OrderBookEntry]:
            return [OrderBookEntry(price=level[0], quantity=level[1]) for level in levels]

        return cls(asks=_entries(asks), bids=_entries(bids))


class LastPrice(BaseModel):
    symbol: Symbol
    price: Decimal


class ExchangeSymbol(BaseModel):
    symbol: Symbol
    status: str


class FilteredOrderBook(BaseModel):
    symbol: Symbol
    depth_percent: Decimal
    last_price: Decimal
    asks: list[OrderBookEntry] = Field(default_factory=list)
    bids: list[OrderBookEntry] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def asks_volume(self) -> Decimal:
        return sum((entry.quantity for entry in self.asks), Decimal(0))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bids_volume(self) -> Decimal:
        return sum((entry.quantity for entry in self.bids), Decimal(0))
