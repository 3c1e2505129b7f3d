"""CLI commands for the Order aggregate."""

from __future__ import annotations

import asyncio

import click

from ordersvc.application.change_order_status import ChangeOrderStatusHandler
from ordersvc.application.create_order import CreateOrderHandler
from ordersvc.application.dto import OrderDTO, OrderItemSpec
from ordersvc.application.list_orders import ListOrdersHandler
from ordersvc.application.pagination import DEFAULT_LIMIT, DEFAULT_PAGE
from ordersvc.application.show_order import ShowOrderHandler
from ordersvc.domain.exceptions import DomainException
from ordersvc.domain.model.order import OrderStatus
from ordersvc.infrastructure.bootstrap import open_services

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'p-1:3,p-2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        if qty <= 0:
            raise click.BadParameter(f"Quantity for product '{product_id}' must be positive.")
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _run(coro):
    """Run one use case, turning domain errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    if dto.updated_at is not None:
        click.echo(f"Updated:  {dto.updated_at:%Y-%m-%d %H:%M UTC}")
    click.echo()
    click.echo(f"  {'Product':<38} {'Name':<20} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*76}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<38} {item.name or '?':<20} {item.quantity:>5} {item.price:>10.2f}"
        )
    click.echo(f"  {'-'*76}")
    click.echo(f"  {'Total items':<59} {dto.total_items:>17}")
    click.echo(f"  {'Order Total':<59} {dto.total_amount:>17.2f}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(items: str) -> None:
    """Create a new purchase order."""
    specs = _parse_items(items)

    async def create() -> OrderDTO:
        async with open_services() as svc:
            return await CreateOrderHandler(svc.orders, svc.catalog).handle(specs)

    dto = _run(create())
    click.echo("Order created.")
    _display_order(dto)


@click.command("list")
@click.option("--page", default=DEFAULT_PAGE, type=click.IntRange(min=1), show_default=True)
@click.option("--limit", default=DEFAULT_LIMIT, type=click.IntRange(min=1), show_default=True)
@click.option("--status", default=None, type=STATUS_CHOICE, help="Only orders in this status.")
def order_list(page: int, limit: int, status: str | None) -> None:
    """List orders, most recent first."""
    wanted = OrderStatus(status.upper()) if status else None

    async def list_orders():
        async with open_services() as svc:
            return await ListOrdersHandler(svc.orders).handle(page, limit, wanted)

    result = _run(list_orders())

    if not result.data:
        click.echo("No orders found.")
    else:
        click.echo(f"{'ID':<38} {'Status':<10} {'Items':>6} {'Total':>12}  Created")
        click.echo("-" * 86)
        for dto in result.data:
            click.echo(
                f"{dto.id:<38} {dto.status:<10} {dto.total_items:>6} "
                f"{dto.total_amount:>12.2f}  {dto.created_at:%Y-%m-%d %H:%M}"
            )
    meta = result.meta
    click.echo(f"Page {meta.page} of {meta.last_page}  ({meta.total} orders)")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""

    async def show() -> OrderDTO:
        async with open_services() as svc:
            return await ShowOrderHandler(svc.orders, svc.catalog).handle(order_id)

    _display_order(_run(show()))


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", required=True, type=STATUS_CHOICE, help="New status.")
def order_status(order_id: str, status: str) -> None:
    """Change the status of an order."""
    new_status = OrderStatus(status.upper())

    async def change() -> OrderDTO:
        async with open_services() as svc:
            handler = ChangeOrderStatusHandler(svc.orders, svc.catalog)
            return await handler.handle(order_id, new_status)

    dto = _run(change())
    click.echo(f"Order {dto.id} is {dto.status}.")
