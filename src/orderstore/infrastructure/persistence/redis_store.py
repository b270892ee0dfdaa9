"""Redis implementation of KeyValueStore.

Order values are plain string keys.  The index is a sorted set whose
members all carry score 0, so Redis keeps them in lexicographic order
and ``scan_members`` can page by rank: the cursor is the rank of the
first member of the next page (``ZRANGE`` never returns more than asked,
unlike ``SSCAN`` whose COUNT is only a hint).  Transactions are
``MULTI``/``EXEC`` pipelines.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import redis

from orderstore.domain.exceptions import StoreTimeoutError, StoreUnavailableError
from orderstore.infrastructure.persistence.kv_store import KeyValueStore, Transaction

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except redis.exceptions.TimeoutError as exc:
        raise StoreTimeoutError(f"redis {operation} timed out: {exc}") from exc
    except redis.exceptions.RedisError as exc:
        raise StoreUnavailableError(f"redis {operation} failed: {exc}") from exc


def _as_bytes(value: bytes | str | None) -> bytes | None:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def _as_str(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class RedisTransaction(Transaction):

    def __init__(self, pipeline: redis.client.Pipeline) -> None:
        self._pipeline = pipeline
        self._ops: list[str] = []

    def set_if_absent(self, key: str, value: bytes) -> None:
        self._pipeline.set(key, value, nx=True)
        self._ops.append("set")

    def set_if_present(self, key: str, value: bytes) -> None:
        self._pipeline.set(key, value, xx=True)
        self._ops.append("set")

    def delete(self, key: str) -> None:
        self._pipeline.delete(key)
        self._ops.append("count")

    def add_member(self, set_key: str, member: str) -> None:
        self._pipeline.zadd(set_key, {member: 0})
        self._ops.append("count")

    def remove_member(self, set_key: str, member: str) -> None:
        self._pipeline.zrem(set_key, member)
        self._ops.append("count")

    def execute(self) -> list:
        try:
            with _translate_errors("exec"):
                raw = self._pipeline.execute()
        finally:
            self._pipeline.reset()
        return [bool(r) if op == "set" else int(r or 0) > 0 for op, r in zip(self._ops, raw)]

    def discard(self) -> None:
        self._ops.clear()
        self._pipeline.reset()


class RedisKeyValueStore(KeyValueStore):
    """Wraps a shared ``redis.Redis`` client; safe to use from many threads."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> RedisKeyValueStore:
        client = redis.Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        logger.debug("Created redis client for %s", url)
        return cls(client)

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> bytes | None:
        with _translate_errors("get"):
            return _as_bytes(self._client.get(key))

    def get_many(self, keys: list[str]) -> list[bytes | None]:
        if not keys:
            return []
        with _translate_errors("mget"):
            return [_as_bytes(v) for v in self._client.mget(keys)]

    def set_if_absent(self, key: str, value: bytes) -> bool:
        with _translate_errors("set nx"):
            return bool(self._client.set(key, value, nx=True))

    def set_if_present(self, key: str, value: bytes) -> bool:
        with _translate_errors("set xx"):
            return bool(self._client.set(key, value, xx=True))

    def delete(self, key: str) -> bool:
        with _translate_errors("del"):
            return self._client.delete(key) > 0

    def scan_members(self, set_key: str, cursor: int, count: int) -> tuple[int, list[str]]:
        # One extra member tells us whether another page exists.
        with _translate_errors("zrange"):
            members = self._client.zrange(set_key, cursor, cursor + count)
        if len(members) > count:
            return cursor + count, [_as_str(m) for m in members[:count]]
        return 0, [_as_str(m) for m in members]

    def transaction(self) -> Transaction:
        return RedisTransaction(self._client.pipeline(transaction=True))
