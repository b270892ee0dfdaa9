"""Application service: Create Order use case.

Builds a new Order from user input, assigns it a random 64-bit ID and
persists it.  The ID source is not collision-proof; a collision surfaces
as EntityExistsError from the repository rather than an overwrite.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Callable

from orderstore.application.dto import LineItemSpec, OrderDTO, to_order_dto
from orderstore.domain.exceptions import ValidationError
from orderstore.domain.model.order import LineItem, Order
from orderstore.domain.repository.order_repository import OrderRepository


def random_order_id() -> int:
    return random.getrandbits(64)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        id_source: Callable[[], int] = random_order_id,
    ) -> None:
        self._order_repo = order_repo
        self._id_source = id_source

    def handle(self, customer_id: str, item_specs: list[LineItemSpec]) -> OrderDTO:
        order = Order.create(
            order_id=self._id_source(),
            customer_id=_parse_uuid(customer_id, "customer ID"),
            line_items=[
                LineItem(
                    item_id=_parse_uuid(spec.item_id, "item ID"),
                    quantity=spec.quantity,
                    price=spec.price,
                )
                for spec in item_specs
            ],
        )
        self._order_repo.insert(order)
        return to_order_dto(order)


def _parse_uuid(raw: str, what: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {what}: {raw!r}") from exc
