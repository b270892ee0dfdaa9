"""Composition root -- wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from orderstore.infrastructure.persistence.kv_order_repository import (
    KeyValueOrderRepository,
)
from orderstore.infrastructure.persistence.redis_store import RedisKeyValueStore
from orderstore.infrastructure.settings import get_settings


# One client (and its connection pool) per process.
@lru_cache()
def kv_store() -> RedisKeyValueStore:
    settings = get_settings()
    return RedisKeyValueStore.from_url(
        settings.redis_url, socket_timeout=settings.socket_timeout
    )


def order_repository() -> KeyValueOrderRepository:
    return KeyValueOrderRepository(kv_store())
