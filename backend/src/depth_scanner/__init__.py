"""Order book depth scanner.

Fetches a live price and an order book snapshot from the exchange, keeps the
entries that sit inside a percentage band around the price and returns the
largest of them per side.
"""

from __future__ import annotations

__version__ = "0.1.0"
