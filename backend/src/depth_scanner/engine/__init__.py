"""Pure order book transformations."""

from .depth_filter import (
    build_filtered_order_book,
    filter_side,
    find_border_price,
    normalize_price,
    rank_entries,
    trim_entries,
)

__all__ = [
    "build_filtered_order_book",
    "filter_side",
    "find_border_price",
    "normalize_price",
    "rank_entries",
    "trim_entries",
]
