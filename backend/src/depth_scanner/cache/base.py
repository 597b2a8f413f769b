from __future__ import annotations

from typing import Protocol


class CacheStore(Protocol):
    """Key/value store with server-side expiry."""

    async def get(self, key: str) -> str | None:
        ...

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        ...
