"""Abstract key-value backend used by the order repository.

Any engine that can apply several mutations as one all-or-nothing unit
can sit behind this interface.  Implementations translate their own
client errors into ``StoreUnavailableError``/``StoreTimeoutError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transaction(ABC):
    """Mutations queued here are applied together by ``execute()``.

    Each queue method returns nothing; ``execute()`` returns one result
    per queued mutation, in queue order, with the same meaning as the
    matching ``KeyValueStore`` method.
    """

    @abstractmethod
    def set_if_absent(self, key: str, value: bytes) -> None: ...

    @abstractmethod
    def set_if_present(self, key: str, value: bytes) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def add_member(self, set_key: str, member: str) -> None: ...

    @abstractmethod
    def remove_member(self, set_key: str, member: str) -> None: ...

    @abstractmethod
    def execute(self) -> list:
        """Apply all queued mutations, or none of them."""

    @abstractmethod
    def discard(self) -> None:
        """Drop all queued mutations without touching the store."""


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the value under *key*, or None if absent."""

    @abstractmethod
    def get_many(self, keys: list[str]) -> list[bytes | None]:
        """Read several keys in one round trip, preserving order."""

    @abstractmethod
    def set_if_absent(self, key: str, value: bytes) -> bool:
        """Write only if *key* does not exist.  True if written."""

    @abstractmethod
    def set_if_present(self, key: str, value: bytes) -> bool:
        """Write only if *key* already exists.  True if written."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*.  True if it existed."""

    @abstractmethod
    def scan_members(self, set_key: str, cursor: int, count: int) -> tuple[int, list[str]]:
        """Return at most *count* members of a set and the next cursor.

        *cursor* is opaque; 0 starts a scan and a returned 0 means the
        scan is finished.
        """

    @abstractmethod
    def transaction(self) -> Transaction:
        """Start a new, empty transaction."""
