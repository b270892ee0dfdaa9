"""Application service: List Orders use case (paged query)."""

from __future__ import annotations

from orderstore.application.dto import OrderPageDTO, to_order_dto
from orderstore.domain.repository.order_repository import FindAllPage, OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, page_size: int = 50) -> None:
        self._order_repo = order_repo
        self._page_size = page_size

    def handle(self, cursor: int = 0) -> OrderPageDTO:
        result = self._order_repo.find_all(
            FindAllPage(offset=cursor, size=self._page_size)
        )
        return OrderPageDTO(
            items=[to_order_dto(order) for order in result.orders],
            next=result.cursor,
        )
