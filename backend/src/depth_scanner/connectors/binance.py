"""Binance spot REST client.

Only three public endpoints are used: last price, order book snapshot and
exchange info. Every failure (transport, HTTP status, ``{"code", "msg"}``
error body, unexpected payload shape) surfaces as
:class:`~depth_scanner.errors.InternalError` with the original message.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

import httpx
from pydantic import ValidationError

from ..domain import ExchangeSymbol, LastPrice, OrderBook, Symbol
from ..errors import InternalError
from ..settings import settings

logger = logging.getLogger(__name__)

LAST_PRICE_PATH = "/api/v3/ticker/price"
ORDER_BOOK_PATH = "/api/v3/depth"
EXCHANGE_INFO_PATH = "/api/v3/exchangeInfo"

BINANCE_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "Cache-Control": "no-cache",
}


def _get_client_params(
    base_url: str,
    timeout: float,
    proxies: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "base_url": base_url,
        "timeout": httpx.Timeout(timeout),
        "headers": BINANCE_HEADERS,
    }
    if proxies:
        params["mounts"] = {
            pattern: httpx.AsyncHTTPTransport(proxy=url) for pattern, url in proxies.items()
        }
    return params


class BinanceSpotClient:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        order_book_limit: int | None = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                **_get_client_params(
                    base_url or settings.binance_api_url,
                    timeout if timeout is not None else settings.http_timeout,
                    settings.httpx_proxies,
                )
            )
        self._client = client
        self._order_book_limit = order_book_limit or settings.order_book_limit

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_last_price(self, symbol: Symbol) -> LastPrice:
        payload = await self._request(LAST_PRICE_PATH, {"symbol": symbol})
        try:
            return LastPrice.model_validate(payload)
        except ValidationError as exc:
            raise InternalError.wrap(exc, f"Unexpected last price payload for {symbol}") from exc

    async def get_order_book(self, symbol: Symbol) -> OrderBook:
        params = {"symbol": symbol, "limit": str(self._order_book_limit)}
        payload = await self._request(ORDER_BOOK_PATH, params)
        try:
            return OrderBook.from_levels(asks=payload["asks"], bids=payload["bids"])
        except (KeyError, TypeError, IndexError, ValidationError) as exc:
            raise InternalError.wrap(exc, f"Unexpected order book payload for {symbol}") from exc

    async def get_exchange_info(self) -> List[ExchangeSymbol]:
        payload = await self._request(EXCHANGE_INFO_PATH)
        try:
            items = payload["symbols"]
            return [ExchangeSymbol.model_validate(item) for item in items]
        except (KeyError, TypeError, ValidationError) as exc:
            raise InternalError.wrap(exc, "Unexpected exchange info payload") from exc

    async def _request(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Binance request %s failed: %s", path, exc)
            raise InternalError.wrap(exc, f"Binance request {path} failed") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise InternalError(
                f"Binance returned a non-JSON response for {path} (status {response.status_code})"
            ) from exc

        # Binance reports errors as {"code": -1121, "msg": "Invalid symbol."}
        if isinstance(payload, dict) and "code" in payload and "msg" in payload:
            raise InternalError(str(payload["msg"]))
        if response.status_code >= 400:
            raise InternalError(f"Binance responded with status {response.status_code} for {path}")
        if payload is None:
            raise InternalError("Binance returned no data")
        return payload
