from __future__ import annotations

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from ..errors import InternalError
from ..settings import settings


class RedisCacheStore:
    """:class:`CacheStore` backed by Redis ``GET`` / ``SET EX``."""

    def __init__(self, client: aioredis.Redis | None = None, *, url: str | None = None) -> None:
        self._owns_client = client is None
        if client is None:
            client = aioredis.Redis.from_url(url or settings.redis_url, decode_responses=True)
        self._client = client

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as exc:
            raise InternalError.wrap(exc, f"Redis GET {key} failed") from exc
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise InternalError.wrap(exc, f"Redis value for {key} is not valid UTF-8") from exc
        return value

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as exc:
            raise InternalError.wrap(exc, f"Redis SET {key} failed") from exc
