"""Application service: Update Order Status use case.

Only two transitions exist: ``shipped`` (once) and then ``completed``
(once, after shipping).  The Order aggregate enforces the ordering;
the repository stores whatever it is given.
"""

from __future__ import annotations

from datetime import datetime, timezone

from orderstore.application.dto import OrderDTO, to_order_dto
from orderstore.domain.exceptions import ValidationError
from orderstore.domain.repository.order_repository import OrderRepository

SHIPPED = "shipped"
COMPLETED = "completed"


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, status: str) -> OrderDTO:
        order = self._order_repo.find_by_id(order_id)
        now = datetime.now(timezone.utc)

        if status == SHIPPED:
            order.mark_shipped(now)
        elif status == COMPLETED:
            order.mark_completed(now)
        else:
            raise ValidationError(
                f"Unknown status {status!r}; expected {SHIPPED!r} or {COMPLETED!r}"
            )

        self._order_repo.update(order)
        return to_order_dto(order)
