"""Shared application constants."""

from decimal import Decimal

TOP_LIMITS: int = 10
"""Maximum number of entries kept per side of a filtered order book."""

PRICE_SCALE: int = 4
"""Fractional digits a displayed price is truncated to."""

TRADING_STATUS = "TRADING"

ORDER_BOOK_KEY_PREFIX = "orderbook-"

ONE_HUNDRED = Decimal(100)
