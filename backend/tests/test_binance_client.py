from decimal import Decimal

import httpx
import pytest

from depth_scanner.connectors.binance import BinanceSpotClient
from depth_scanner.domain import OrderBookEntry
from depth_scanner.errors import InternalError


def _client(handler, **kwargs) -> tuple[BinanceSpotClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.binance.test")
    return BinanceSpotClient(http, **kwargs), http


@pytest.mark.asyncio
async def test_get_last_price():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"symbol": "SOLUSDT", "price": "142.87000000"})

    client, http = _client(handler)
    result = await client.get_last_price("SOLUSDT")
    await http.aclose()

    assert result.symbol == "SOLUSDT"
    assert result.price == Decimal("142.87")
    assert seen[0].url.path == "/api/v3/ticker/price"
    assert seen[0].url.params["symbol"] == "SOLUSDT"


@pytest.mark.asyncio
async def test_get_order_book_keeps_exchange_order():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "lastUpdateId": 1027024,
                "bids": [["4.00000000", "431.00000000"], ["3.90000000", "12.00000000"]],
                "asks": [["4.00000200", "12.00000000"], ["4.00000200", "1.00000000"]],
            },
        )

    client, http = _client(handler, order_book_limit=100)
    book = await client.get_order_book("BNBBTC")
    await http.aclose()

    assert seen[0].url.path == "/api/v3/depth"
    assert seen[0].url.params["limit"] == "100"
    assert book.bids[0] == OrderBookEntry(price=Decimal("4"), quantity=Decimal("431"))
    # duplicated price levels are not merged
    assert [entry.quantity for entry in book.asks] == [Decimal(12), Decimal(1)]


@pytest.mark.asyncio
async def test_get_exchange_info():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "timezone": "UTC",
                "symbols": [
                    {"symbol": "SOLUSDT", "status": "TRADING", "baseAsset": "SOL"},
                    {"symbol": "LUNAUSDT", "status": "BREAK", "baseAsset": "LUNA"},
                ],
            },
        )

    client, http = _client(handler)
    items = await client.get_exchange_info()
    await http.aclose()

    assert [(item.symbol, item.status) for item in items] == [
        ("SOLUSDT", "TRADING"),
        ("LUNAUSDT", "BREAK"),
    ]


@pytest.mark.asyncio
async def test_error_body_becomes_internal_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": -1121, "msg": "Invalid symbol."})

    client, http = _client(handler)
    with pytest.raises(InternalError) as excinfo:
        await client.get_last_price("NOPEUSDT")
    await http.aclose()

    assert str(excinfo.value) == "Invalid symbol."


@pytest.mark.asyncio
async def test_null_body_is_reported_as_no_data():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"null", headers={"content-type": "application/json"})

    client, http = _client(handler)
    with pytest.raises(InternalError) as excinfo:
        await client.get_order_book("SOLUSDT")
    await http.aclose()

    assert str(excinfo.value) == "Binance returned no data"


@pytest.mark.asyncio
async def test_unexpected_payload_shape():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"bids": []})

    client, http = _client(handler)
    with pytest.raises(InternalError):
        await client.get_order_book("SOLUSDT")
    await http.aclose()


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, http = _client(handler)
    with pytest.raises(InternalError) as excinfo:
        await client.get_exchange_info()
    await http.aclose()

    assert "connection refused" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_server_error_without_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    client, http = _client(handler)
    with pytest.raises(InternalError) as excinfo:
        await client.get_last_price("SOLUSDT")
    await http.aclose()

    assert "503" in str(excinfo.value)
