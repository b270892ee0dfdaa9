"""Key-value implementation of OrderRepository.

Each order lives under ``order:<id>`` as JSON bytes.  The ``orders`` set
holds one member per stored order so ``find_all`` can page through them
without scanning the whole keyspace.  Inserts and deletes change the
value and the set membership in the same atomic batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from orderstore.domain.exceptions import (
    CorruptRecordError,
    EntityExistsError,
    EntityNotFoundError,
    StoreUnavailableError,
)
from orderstore.domain.model.order import Order
from orderstore.domain.repository.order_repository import (
    FindAllPage,
    FindResult,
    OrderRepository,
)
from orderstore.infrastructure.persistence import codec
from orderstore.infrastructure.persistence.batch import AtomicBatch
from orderstore.infrastructure.persistence.keys import ORDER_INDEX_KEY, order_key
from orderstore.infrastructure.persistence.kv_store import KeyValueStore
from orderstore.infrastructure.persistence.pagination import fetch_chunk

logger = logging.getLogger(__name__)


class KeyValueOrderRepository(OrderRepository):

    def __init__(self, store: KeyValueStore, index_key: str = ORDER_INDEX_KEY) -> None:
        self._store = store
        self._index_key = index_key

    # --- OrderRepository interface --------------------------------------------

    def insert(self, order: Order) -> None:
        data = codec.encode(order)
        key = order_key(order.order_id)

        with self._context("insert", key):
            with AtomicBatch(self._store) as batch:
                batch.set_if_absent(key, data)
                # A no-op when the key already exists: it is already indexed.
                batch.add_member(self._index_key, key)
                written, _ = batch.commit()

        if not written:
            raise EntityExistsError(f"Order #{order.order_id} already exists")
        logger.debug("Inserted %s", key)

    def find_by_id(self, order_id: int) -> Order:
        key = order_key(order_id)

        with self._context("find", key):
            data = self._store.get(key)
        if data is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        return self._decode(key, data)

    def update(self, order: Order) -> None:
        data = codec.encode(order)
        key = order_key(order.order_id)

        with self._context("update", key):
            written = self._store.set_if_present(key, data)
        if not written:
            raise EntityNotFoundError(f"Order #{order.order_id} not found")
        logger.debug("Updated %s", key)

    def delete_by_id(self, order_id: int) -> None:
        key = order_key(order_id)

        with self._context("delete", key):
            with AtomicBatch(self._store) as batch:
                batch.delete(key)
                batch.remove_member(self._index_key, key)
                existed, _ = batch.commit()

        if not existed:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        logger.debug("Deleted %s", key)

    def find_all(self, page: FindAllPage) -> FindResult:
        with self._context("find all", self._index_key):
            chunk = fetch_chunk(
                self._store,
                self._index_key,
                cursor=page.offset,
                size=page.size,
                decode=self._decode,
            )
        return FindResult(orders=chunk.items, cursor=chunk.cursor)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _decode(key: str, data: bytes) -> Order:
        order = codec.decode(data)
        if order_key(order.order_id) != key:
            raise CorruptRecordError(
                f"Record under {key} carries order_id {order.order_id}"
            )
        return order

    @staticmethod
    @contextmanager
    def _context(operation: str, key: str) -> Iterator[None]:
        """Re-raise backend failures with the operation and key attached."""
        try:
            yield
        except StoreUnavailableError as exc:
            raise type(exc)(f"Failed to {operation} {key}: {exc}") from exc
