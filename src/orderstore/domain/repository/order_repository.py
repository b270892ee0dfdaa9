"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from orderstore.domain.model.order import Order


@dataclass(frozen=True)
class FindAllPage:
    """Input to ``find_all``.

    ``offset`` is an opaque cursor taken verbatim from a previous
    ``FindResult.cursor`` (0 starts a new scan).  It is not a page number.
    """

    offset: int = 0
    size: int = 50


@dataclass(frozen=True)
class FindResult:
    """Output of ``find_all``.  ``cursor == 0`` means no further pages."""

    orders: list[Order] = field(default_factory=list)
    cursor: int = 0


class OrderRepository(ABC):

    @abstractmethod
    def insert(self, order: Order) -> None:
        """Store a new order.  Raises EntityExistsError if the ID is taken."""

    @abstractmethod
    def find_by_id(self, order_id: int) -> Order:
        """Return an order by its ID.  Raises EntityNotFoundError if absent."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Overwrite an existing order.  Raises EntityNotFoundError if absent."""

    @abstractmethod
    def delete_by_id(self, order_id: int) -> None:
        """Remove an order.  Raises EntityNotFoundError if absent."""

    @abstractmethod
    def find_all(self, page: FindAllPage) -> FindResult:
        """Return up to ``page.size`` orders starting at ``page.offset``.

        No global ordering is promised across pages, and orders inserted
        or deleted between two calls may be skipped or seen twice.
        """
