"""Order <-> JSON conversion.

``to_wire``/``from_wire`` produce and accept plain JSON-ready dicts (the
transport shape); ``encode``/``decode`` wrap them as UTF-8 bytes for the
key-value store.  Absent timestamps are written as ``null`` so a round
trip keeps them absent.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime

from orderstore.domain.exceptions import (
    CorruptRecordError,
    EncodingError,
    ValidationError,
)
from orderstore.domain.model.order import MAX_ORDER_ID, LineItem, Order

FIELDS = ("order_id", "customer_id", "line_items", "created_at", "shipped_at", "completed_at")


def encode(order: Order) -> bytes:
    try:
        raw = to_wire(order)
    except (AttributeError, TypeError, ValueError) as exc:
        raise EncodingError(f"Failed to encode order: {exc}") from exc
    return json.dumps(raw, separators=(",", ":")).encode("utf-8")


def decode(data: bytes | str) -> Order:
    try:
        raw = json.loads(data)
        return from_wire(raw)
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
        raise CorruptRecordError(f"Failed to decode order json: {exc}") from exc


# --- Wire shape ---------------------------------------------------------------

def to_wire(order: Order) -> dict:
    return {
        "order_id": _order_id(order.order_id),
        "customer_id": str(uuid.UUID(str(order.customer_id))),
        "line_items": [
            {
                "item_id": str(uuid.UUID(str(item.item_id))),
                "quantity": _unsigned(item.quantity, "quantity"),
                "price": _unsigned(item.price, "price"),
            }
            for item in order.line_items
        ],
        "created_at": _timestamp(order.created_at, required=True),
        "shipped_at": _timestamp(order.shipped_at),
        "completed_at": _timestamp(order.completed_at),
    }


def from_wire(raw: dict) -> Order:
    if not isinstance(raw, dict):
        raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
    missing = [name for name in FIELDS if name not in raw]
    if missing:
        raise KeyError(", ".join(missing))

    return Order(
        order_id=_order_id(raw["order_id"]),
        customer_id=uuid.UUID(raw["customer_id"]),
        line_items=[
            LineItem(
                item_id=uuid.UUID(i["item_id"]),
                quantity=i["quantity"],
                price=i["price"],
            )
            for i in raw["line_items"] or []
        ],
        created_at=_parse_timestamp(raw["created_at"], required=True),
        shipped_at=_parse_timestamp(raw["shipped_at"]),
        completed_at=_parse_timestamp(raw["completed_at"]),
    )


# --- Helpers ------------------------------------------------------------------

def _order_id(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"order_id must be an int, got {type(value).__name__}")
    if not 0 <= value <= MAX_ORDER_ID:
        raise ValueError(f"order_id {value} is outside the 64-bit range")
    return value


def _unsigned(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} cannot be negative")
    return value


def _timestamp(value: datetime | None, required: bool = False) -> str | None:
    if value is None:
        if required:
            raise ValueError("created_at is required")
        return None
    if not isinstance(value, datetime):
        raise TypeError(f"expected a datetime, got {type(value).__name__}")
    return value.isoformat()


def _parse_timestamp(value: str | None, required: bool = False) -> datetime | None:
    if value is None:
        if required:
            raise ValueError("created_at is required")
        return None
    return datetime.fromisoformat(value)
