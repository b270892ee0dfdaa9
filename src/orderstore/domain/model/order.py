"""Order entity -- the only aggregate in the domain.

An order's status is not stored as an enum.  It is derived from which
timestamps are present: ``shipped_at`` and ``completed_at`` start out
absent and are each set exactly once, in that order.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderstore.domain.exceptions import ValidationError

MAX_ORDER_ID = 2**64 - 1


@dataclass(frozen=True)
class LineItem:
    item_id: uuid.UUID
    quantity: int
    price: int

    def __post_init__(self) -> None:
        if not isinstance(self.item_id, uuid.UUID):
            raise ValidationError(
                f"Item ID must be a UUID, got {type(self.item_id).__name__}"
            )
        for name in ("quantity", "price"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"Line item {name} must be an integer, got {type(value).__name__}"
                )
            if value < 0:
                raise ValidationError(f"Line item {name} cannot be negative")


@dataclass
class Order:
    """A customer order keyed by a caller-assigned 64-bit ID.

    ``__init__`` does no validation so the codec can rebuild stored
    orders as they are; use ``Order.create()`` for new orders.
    """

    order_id: int
    customer_id: uuid.UUID
    line_items: list[LineItem]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    shipped_at: datetime | None = None
    completed_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: int,
        customer_id: uuid.UUID,
        line_items: list[LineItem],
        now: datetime | None = None,
    ) -> Order:
        if isinstance(order_id, bool) or not isinstance(order_id, int):
            raise ValidationError("Order ID must be an integer")
        if not 0 <= order_id <= MAX_ORDER_ID:
            raise ValidationError(f"Order ID {order_id} is outside the 64-bit range")
        if not isinstance(customer_id, uuid.UUID):
            raise ValidationError("Customer ID must be a UUID")

        return Order(
            order_id=order_id,
            customer_id=customer_id,
            line_items=list(line_items),
            created_at=now or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def mark_shipped(self, when: datetime | None = None) -> None:
        if self.shipped_at is not None:
            raise ValidationError(f"Order #{self.order_id} has already shipped")
        self.shipped_at = when or datetime.now(timezone.utc)

    def mark_completed(self, when: datetime | None = None) -> None:
        if self.completed_at is not None:
            raise ValidationError(f"Order #{self.order_id} is already completed")
        if self.shipped_at is None:
            raise ValidationError(
                f"Order #{self.order_id} cannot be completed before it ships"
            )
        self.completed_at = when or datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def status(self) -> str:
        if self.completed_at is not None:
            return "completed"
        if self.shipped_at is not None:
            return "shipped"
        return "created"

    @property
    def total(self) -> int:
        return sum(item.quantity * item.price for item in self.line_items)
