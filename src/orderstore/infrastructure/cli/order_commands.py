"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json

import click

from orderstore.application.create_order import CreateOrderHandler
from orderstore.application.delete_order import DeleteOrderHandler
from orderstore.application.dto import LineItemSpec
from orderstore.application.list_orders import ListOrdersHandler
from orderstore.application.show_order import ShowOrderHandler
from orderstore.application.update_order_status import (
    COMPLETED,
    SHIPPED,
    UpdateOrderStatusHandler,
)
from orderstore.domain.exceptions import DomainException
from orderstore.domain.model.order import MAX_ORDER_ID
from orderstore.infrastructure.bootstrap import order_repository
from orderstore.infrastructure.persistence.pagination import MAX_CURSOR
from orderstore.infrastructure.settings import get_settings

ORDER_ID = click.IntRange(0, MAX_ORDER_ID)


def _parse_items(raw: str) -> list[LineItemSpec]:
    """Parse 'ITEM_UUID:QTY:PRICE,...' into LineItemSpec list."""
    specs: list[LineItemSpec] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        fields = part.split(":")
        if len(fields) != 3:
            raise click.BadParameter(
                f"Invalid item format '{part}'. Expected 'ItemID:Quantity:Price'."
            )
        item_id, qty_str, price_str = (f.strip() for f in fields)
        try:
            qty, price = int(qty_str), int(price_str)
        except ValueError:
            raise click.BadParameter(
                f"Quantity and price must be integers in '{part}'."
            )
        specs.append(LineItemSpec(item_id=item_id, quantity=qty, price=price))
    return specs


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2))


@click.command("create")
@click.option("--customer", required=True, help="Customer UUID.")
@click.option("--items", default="", help="Items as 'ItemID:Qty:Price,ItemID:Qty:Price'.")
def order_create(customer: str, items: str) -> None:
    """Create a new order."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(customer_id=customer, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_json(dto.as_dict())


@click.command("show")
@click.option("--id", "order_id", required=True, type=ORDER_ID, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show a single order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_json(dto.as_dict())


@click.command("list")
@click.option(
    "--cursor",
    default=0,
    type=click.IntRange(0, MAX_CURSOR),
    help="Cursor from a previous page's 'next' (0 starts over).",
)
def order_list(cursor: int) -> None:
    """List orders one page at a time."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        page_size=get_settings().page_size,
    )

    try:
        page = handler.handle(cursor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_json(page.as_dict())


@click.command("update")
@click.option("--id", "order_id", required=True, type=ORDER_ID, help="Order ID to update.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([SHIPPED, COMPLETED]),
    help="New order status.",
)
def order_update(order_id: int, status: str) -> None:
    """Mark an order shipped or completed."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_json(dto.as_dict())


@click.command("delete")
@click.option("--id", "order_id", required=True, type=ORDER_ID, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Delete an order."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")
