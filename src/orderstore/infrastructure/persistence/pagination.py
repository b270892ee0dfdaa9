"""Cursor pagination over the order index."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from orderstore.domain.exceptions import ValidationError
from orderstore.infrastructure.persistence.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Redis ranks are signed 64-bit.
MAX_CURSOR = 2**63 - 1


@dataclass(frozen=True)
class Chunk(Generic[T]):
    items: list[T] = field(default_factory=list)
    cursor: int = 0


def fetch_chunk(
    store: KeyValueStore,
    index_key: str,
    cursor: int,
    size: int,
    decode: Callable[[str, bytes], T],
) -> Chunk[T]:
    """Scan up to *size* index members from *cursor* and load their values.

    *decode* receives each key together with its value.  Members whose
    value has disappeared since they were scanned (a delete racing the
    scan) are skipped.  The returned cursor must be passed back verbatim;
    0 means the index is exhausted.
    """
    if size <= 0:
        raise ValidationError(f"page size must be positive, got {size}")
    if not 0 <= cursor <= MAX_CURSOR:
        raise ValidationError(f"cursor {cursor} is out of range")

    next_cursor, keys = store.scan_members(index_key, cursor, size)
    if not keys:
        return Chunk(cursor=0)

    values = store.get_many(keys)
    items: list[T] = []
    for key, value in zip(keys, values):
        if value is None:
            logger.warning("Index entry %s has no stored value; skipping", key)
            continue
        items.append(decode(key, value))

    return Chunk(items=items, cursor=next_cursor)
