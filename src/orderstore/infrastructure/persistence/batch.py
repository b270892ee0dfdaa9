"""Atomic batch writer: queue dependent mutations, commit them as one unit."""

from __future__ import annotations

import logging
from types import TracebackType

from orderstore.domain.exceptions import StoreUnavailableError
from orderstore.infrastructure.persistence.kv_store import KeyValueStore, Transaction

logger = logging.getLogger(__name__)


class AtomicBatch:
    """Collects mutations against a ``KeyValueStore`` and commits them together.

    Use as a context manager.  Leaving the block without ``commit()``
    (normally or through an exception) discards whatever was queued, so a
    failure while queueing never reaches the store::

        with AtomicBatch(store, "insert order:7") as batch:
            batch.set_if_absent("order:7", data)
            batch.add_member("orders", "order:7")
            written, _ = batch.commit()
    """

    def __init__(self, store: KeyValueStore, label: str = "batch") -> None:
        self._store = store
        self._label = label
        self._tx: Transaction | None = None
        self._size = 0

    # --- Lifecycle ------------------------------------------------------------

    def begin(self) -> AtomicBatch:
        if self._tx is not None:
            raise RuntimeError(f"{self._label}: batch already started")
        self._tx = self._store.transaction()
        self._size = 0
        return self

    def commit(self) -> list:
        tx = self._require_open()
        self._tx = None
        logger.debug("%s: committing %d mutation(s)", self._label, self._size)
        try:
            return tx.execute()
        except StoreUnavailableError as exc:
            raise type(exc)(f"{self._label}: commit failed: {exc}") from exc

    def abandon(self) -> None:
        if self._tx is None:
            return
        tx, self._tx = self._tx, None
        logger.debug("%s: abandoning %d queued mutation(s)", self._label, self._size)
        tx.discard()

    def __enter__(self) -> AtomicBatch:
        return self.begin()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.abandon()

    # --- Mutations ------------------------------------------------------------

    def set_if_absent(self, key: str, value: bytes) -> None:
        self._queue("set_if_absent", key, value)

    def set_if_present(self, key: str, value: bytes) -> None:
        self._queue("set_if_present", key, value)

    def delete(self, key: str) -> None:
        self._queue("delete", key)

    def add_member(self, set_key: str, member: str) -> None:
        self._queue("add_member", set_key, member)

    def remove_member(self, set_key: str, member: str) -> None:
        self._queue("remove_member", set_key, member)

    # --- Internal helpers -----------------------------------------------------

    def _queue(self, op: str, *args) -> None:
        tx = self._require_open()
        try:
            getattr(tx, op)(*args)
        except Exception:
            self.abandon()
            raise
        self._size += 1

    def _require_open(self) -> Transaction:
        if self._tx is None:
            raise RuntimeError(f"{self._label}: batch is not open")
        return self._tx
