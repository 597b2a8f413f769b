"""Snapshot cache backends."""

from .base import CacheStore
from .redis_store import RedisCacheStore

__all__ = ["CacheStore", "RedisCacheStore"]
