"""In-memory fake key-value store for testing.

Implements the same abstract interface as the Redis backend but keeps
everything in dicts.  No network, no side effects.  Transactions stage
their mutations and apply them only on ``execute()``.

``fail_on`` makes the named operation raise StoreUnavailableError, which
lets tests exercise the error paths of the repository and batch writer.
"""

from __future__ import annotations

from orderstore.domain.exceptions import StoreTimeoutError, StoreUnavailableError
from orderstore.infrastructure.persistence.kv_store import KeyValueStore, Transaction


class FakeTransaction(Transaction):

    def __init__(self, store: FakeKeyValueStore) -> None:
        self._store = store
        self._queued: list[tuple[str, tuple]] = []
        self.discarded = False

    def set_if_absent(self, key: str, value: bytes) -> None:
        self._enqueue("set_if_absent", key, value)

    def set_if_present(self, key: str, value: bytes) -> None:
        self._enqueue("set_if_present", key, value)

    def delete(self, key: str) -> None:
        self._enqueue("delete", key)

    def add_member(self, set_key: str, member: str) -> None:
        self._enqueue("add_member", set_key, member)

    def remove_member(self, set_key: str, member: str) -> None:
        self._enqueue("remove_member", set_key, member)

    def execute(self) -> list:
        self._store._maybe_fail("execute")
        values = dict(self._store.values)
        sets = {k: set(v) for k, v in self._store.sets.items()}
        try:
            results = [getattr(self._store, op)(*args) for op, args in self._queued]
        except StoreUnavailableError:
            self._store.values, self._store.sets = values, sets
            raise
        finally:
            self._queued = []
        self._store.executed += 1
        return results

    def discard(self) -> None:
        self._queued = []
        self.discarded = True

    def _enqueue(self, op: str, *args) -> None:
        self._store._maybe_fail("queue " + op)
        self._queued.append((op, args))


class FakeKeyValueStore(KeyValueStore):

    def __init__(self) -> None:
        self.values: dict[str, bytes] = {}
        self.sets: dict[str, set[str]] = {}
        self.fail_on: dict[str, StoreUnavailableError] = {}
        self.transactions: list[FakeTransaction] = []
        self.executed = 0

    # --- Failure injection ----------------------------------------------------

    def fail(self, op: str, timeout: bool = False) -> None:
        error = StoreTimeoutError if timeout else StoreUnavailableError
        self.fail_on[op] = error(f"injected failure on {op}")

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise self.fail_on[op]

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> bytes | None:
        self._maybe_fail("get")
        return self.values.get(key)

    def get_many(self, keys: list[str]) -> list[bytes | None]:
        self._maybe_fail("get_many")
        return [self.values.get(k) for k in keys]

    def set_if_absent(self, key: str, value: bytes) -> bool:
        self._maybe_fail("set_if_absent")
        if key in self.values:
            return False
        self.values[key] = value
        return True

    def set_if_present(self, key: str, value: bytes) -> bool:
        self._maybe_fail("set_if_present")
        if key not in self.values:
            return False
        self.values[key] = value
        return True

    def delete(self, key: str) -> bool:
        self._maybe_fail("delete")
        return self.values.pop(key, None) is not None

    def add_member(self, set_key: str, member: str) -> bool:
        members = self.sets.setdefault(set_key, set())
        if member in members:
            return False
        members.add(member)
        return True

    def remove_member(self, set_key: str, member: str) -> bool:
        members = self.sets.get(set_key, set())
        if member not in members:
            return False
        members.discard(member)
        return True

    def scan_members(self, set_key: str, cursor: int, count: int) -> tuple[int, list[str]]:
        self._maybe_fail("scan_members")
        members = sorted(self.sets.get(set_key, set()))
        chunk = members[cursor:cursor + count]
        end = cursor + count
        return (end if end < len(members) else 0), chunk

    def transaction(self) -> FakeTransaction:
        tx = FakeTransaction(self)
        self.transactions.append(tx)
        return tx
