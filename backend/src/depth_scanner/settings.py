from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from functools import cached_property

from pydantic import BaseModel, Field


def _split_csv(raw: str) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for part in raw.split(","):
        item = part.strip()
        if not item or item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def _normalize_symbols(raw: str) -> list[str]:
    return _split_csv(raw.upper())


def _parse_depth_options(raw: str) -> list[Decimal]:
    options: list[Decimal] = []
    for item in _split_csv(raw):
        try:
            options.append(Decimal(item.rstrip("%")))
        except InvalidOperation:
            raise ValueError(f"Invalid depth option in env: {item!r}") from None
    return options


def _parse_int(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid int value for {name}: {value!r}") from None


class Settings(BaseModel):
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    binance_api_url: str = os.getenv("BINANCE_API_URL", "https://api.binance.com")
    http_timeout: int = _parse_int("HTTP_TIMEOUT", "10")
    # 5000 is the deepest snapshot Binance spot serves
    order_book_limit: int = _parse_int("ORDER_BOOK_LIMIT", "5000")
    order_book_ttl: int = _parse_int("ORDER_BOOK_TTL", "60")
    symbols_refresh_interval: int = _parse_int("SYMBOLS_REFRESH_INTERVAL", "300")
    quote_asset: str = os.getenv("QUOTE_ASSET", "USDT").strip().upper()
    unsupported_symbols: list[str] = Field(
        default_factory=lambda: _normalize_symbols(
            os.getenv("UNSUPPORTED_SYMBOLS", "BTCUSDT,ETHUSDT,WBTCUSDT,WETHUSDT")
        )
    )
    depth_options: list[Decimal] = Field(
        default_factory=lambda: _parse_depth_options(os.getenv("DEPTH_OPTIONS", "3,5,8,10,15"))
    )
    http_proxy: str | None = os.getenv("HTTP_PROXY")
    https_proxy: str | None = os.getenv("HTTPS_PROXY")

    @cached_property
    def httpx_proxies(self) -> dict[str, str] | None:
        proxies: dict[str, str] = {}
        if self.http_proxy:
            proxies["http://"] = self.http_proxy
        if self.https_proxy:
            proxies["https://"] = self.https_proxy
        return proxies or None


settings = Settings()
