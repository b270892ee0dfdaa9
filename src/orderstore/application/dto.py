"""Data Transfer Objects -- plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from orderstore.domain.model.order import Order


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one requested line item, as typed by the user."""

    item_id: str
    quantity: int
    price: int


@dataclass(frozen=True)
class LineItemDTO:
    item_id: str
    quantity: int
    price: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order.  Timestamps are ISO-8601 or None."""

    order_id: int
    customer_id: str
    status: str
    line_items: list[LineItemDTO]
    total: int
    created_at: str
    shipped_at: str | None
    completed_at: str | None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrderPageDTO:
    """Output: one page of orders.  ``next`` is 0 once the scan is done."""

    items: list[OrderDTO]
    next: int

    def as_dict(self) -> dict:
        data: dict = {"items": [o.as_dict() for o in self.items]}
        if self.next:
            data["next"] = self.next
        return data


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        order_id=order.order_id,
        customer_id=str(order.customer_id),
        status=order.status,
        line_items=[
            LineItemDTO(
                item_id=str(item.item_id),
                quantity=item.quantity,
                price=item.price,
            )
            for item in order.line_items
        ],
        total=order.total,
        created_at=order.created_at.isoformat(),
        shipped_at=order.shipped_at.isoformat() if order.shipped_at else None,
        completed_at=order.completed_at.isoformat() if order.completed_at else None,
    )
