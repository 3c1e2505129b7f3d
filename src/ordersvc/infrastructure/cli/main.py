import click

from ordersvc.infrastructure.bootstrap import setup_logging
from ordersvc.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)


@click.group()
@click.option("--log-level", default=None, help="Override ORDERS_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Orders: order workflow service"""
    setup_logging(log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
