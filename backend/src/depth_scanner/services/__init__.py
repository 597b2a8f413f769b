"""Service utilities for the depth scanner."""

from .depth import DepthService
from .order_book_cache import OrderBookCache, discard_with_logging
from .symbols import SymbolRegistry, poll_symbols_loop

__all__ = [
    "DepthService",
    "OrderBookCache",
    "SymbolRegistry",
    "discard_with_logging",
    "poll_symbols_loop",
]
