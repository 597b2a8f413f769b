from __future__ import annotations

import asyncio
import logging
from decimal import Decimal

from fastapi import FastAPI, HTTPException, Query, Request

from . import __version__
from .cache.base import CacheStore
from .cache.redis_store import RedisCacheStore
from .connectors.base import ExchangeClient
from .connectors.binance import BinanceSpotClient
from .errors import InternalError, SymbolNotFound, UnsupportedSymbol
from .services import DepthService, OrderBookCache, SymbolRegistry, poll_symbols_loop
from .settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
GENERIC_ERROR = "Something went wrong. Try again later"

logger = logging.getLogger(__name__)


def _service(request: Request) -> DepthService:
    return request.app.state.service


def _validate(service: DepthService, raw: str) -> str:
    try:
        return service.validate_symbol(raw)
    except SymbolNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UnsupportedSymbol as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def create_app(
    *,
    client: ExchangeClient | None = None,
    store: CacheStore | None = None,
    registry: SymbolRegistry | None = None,
    start_refresh: bool = True,
) -> FastAPI:
    """Build the HTTP surface.

    Collaborators that are not passed in are created on startup from
    :mod:`depth_scanner.settings` and closed on shutdown.
    """

    app = FastAPI(title="Depth Scanner API", version=__version__)
    tasks: list[asyncio.Task] = []
    owned: list[BinanceSpotClient | RedisCacheStore] = []

    @app.on_event("startup")
    async def startup() -> None:
        logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

        exchange = client
        if exchange is None:
            binance = BinanceSpotClient()
            owned.append(binance)
            exchange = binance
        cache_store = store
        if cache_store is None:
            redis_store = RedisCacheStore()
            owned.append(redis_store)
            cache_store = redis_store

        symbols = registry if registry is not None else SymbolRegistry(exchange)
        app.state.service = DepthService(
            client=exchange,
            registry=symbols,
            cache=OrderBookCache(exchange, cache_store),
        )

        if start_refresh:
            tasks.append(
                asyncio.create_task(
                    poll_symbols_loop(symbols, interval=settings.symbols_refresh_interval)
                )
            )

    @app.on_event("shutdown")
    async def shutdown() -> None:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        tasks.clear()
        for resource in owned:
            try:
                await resource.aclose()
            except Exception:
                logger.exception("Failed to close %s", type(resource).__name__)
        owned.clear()

    @app.get("/health")
    async def health(request: Request):
        return {"status": "ok", "symbols": len(_service(request).registry)}

    @app.get("/api/depth-options")
    async def depth_options():
        return {"options": [str(option) for option in settings.depth_options]}

    @app.get("/api/symbols/{raw}")
    async def validate_symbol(raw: str, request: Request):
        return {"symbol": _validate(_service(request), raw)}

    @app.get("/api/orderbook/{raw}")
    async def filtered_order_book(
        raw: str,
        request: Request,
        depth: Decimal = Query(..., gt=0, le=100),
    ):
        service = _service(request)
        symbol = _validate(service, raw)
        try:
            book = await service.get_filtered_order_book(symbol, depth)
        except InternalError as exc:
            logger.error("Error while requesting order book for %s: %s", symbol, exc)
            raise HTTPException(status_code=502, detail=GENERIC_ERROR) from exc
        return book.model_dump(mode="json")

    return app


app = create_app()
