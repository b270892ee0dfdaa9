"""Application service: Delete Order use case."""

from __future__ import annotations

from orderstore.domain.repository.order_repository import OrderRepository


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        self._order_repo.delete_by_id(order_id)
