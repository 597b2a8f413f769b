"""Depth filter: narrow one side of a book to a band around the last price.

All arithmetic is done on :class:`~decimal.Decimal`; nothing here awaits or
touches I/O.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import Iterable, List, Sequence

from ..constants import ONE_HUNDRED, PRICE_SCALE, TOP_LIMITS
from ..domain import FilteredOrderBook, OrderBook, OrderBookEntry, Side, Symbol


def find_border_price(last_price: Decimal, depth_percent: Decimal, side: Side) -> Decimal:
    """Price at the edge of the band.

    ``depth_percent`` is not range checked: values outside ``(0, 100]`` give
    an empty or unbounded band.
    """

    fraction = depth_percent / ONE_HUNDRED
    if side is Side.ASK:
        return last_price * (1 + fraction)
    return last_price * (1 - fraction)


def _strip_trailing_zeros(value: Decimal) -> Decimal:
    # normalize() alone turns 200 into 2E+2
    if value == value.to_integral_value():
        return value.quantize(Decimal(1))
    return value.normalize()


def normalize_price(price: Decimal, scale: int = PRICE_SCALE) -> Decimal:
    """Truncate (never round) to ``scale`` fractional digits."""

    truncated = price.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_DOWN)
    return _strip_trailing_zeros(truncated)


def _in_band(price: Decimal, border_price: Decimal, side: Side) -> bool:
    # both borders are inclusive
    if side is Side.ASK:
        return price <= border_price
    return price >= border_price


def trim_entries(
    entries: Iterable[OrderBookEntry],
    border_price: Decimal,
    side: Side,
) -> List[OrderBookEntry]:
    """Drop out-of-band entries and normalize the price of the rest.

    Quantity is passed through unchanged.
    """

    return [
        OrderBookEntry(price=normalize_price(entry.price), quantity=entry.quantity)
        for entry in entries
        if _in_band(entry.price, border_price, side)
    ]


def rank_entries(entries: Sequence[OrderBookEntry], limit: int = TOP_LIMITS) -> List[OrderBookEntry]:
    """Largest quantity first; equal quantities keep their input order."""

    ranked = sorted(entries, key=lambda entry: entry.quantity, reverse=True)
    return ranked[:limit]


def filter_side(
    entries: Iterable[OrderBookEntry],
    last_price: Decimal,
    depth_percent: Decimal,
    side: Side,
    *,
    limit: int = TOP_LIMITS,
) -> List[OrderBookEntry]:
    border_price = find_border_price(last_price, depth_percent, side)
    return rank_entries(trim_entries(entries, border_price, side), limit)


def build_filtered_order_book(
    symbol: Symbol,
    book: OrderBook,
    last_price: Decimal,
    depth_percent: Decimal,
) -> FilteredOrderBook:
    return FilteredOrderBook(
        symbol=symbol,
        depth_percent=depth_percent,
        last_price=last_price,
        asks=filter_side(book.asks, last_price, depth_percent, Side.ASK),
        bids=filter_side(book.bids, last_price, depth_percent, Side.BID),
    )
