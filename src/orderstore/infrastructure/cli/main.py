import logging

import click

from orderstore.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)
from orderstore.infrastructure.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """orderstore -- orders kept in a key-value store"""
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
