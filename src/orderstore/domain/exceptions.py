"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.

Callers branch on the concrete class:

- ``EntityNotFoundError``   -- key absent on find/update/delete
- ``EntityExistsError``     -- key already present on insert
- ``PersistenceError``      -- anything the caller cannot fix (corrupt
  record, encoding failure, unreachable backend)
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EntityExistsError(DomainException):
    """An entity with the same identity is already stored."""


class PersistenceError(DomainException):
    """The storage layer failed; surfaced as an internal error."""


class CorruptRecordError(PersistenceError):
    """Stored bytes could not be decoded into an entity."""


class EncodingError(PersistenceError):
    """An entity could not be encoded before a write."""


class StoreUnavailableError(PersistenceError):
    """The backing store could not be reached or rejected the call."""


class StoreTimeoutError(StoreUnavailableError):
    """A backing-store call did not finish within its time budget."""
