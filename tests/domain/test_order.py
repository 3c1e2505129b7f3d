"""Unit tests for the Order aggregate and its derived totals."""

import uuid

import pytest

from ordersvc.domain.exceptions import ValidationError
from ordersvc.domain.model.order import Order, OrderItem, OrderStatus
from ordersvc.domain.model.value_objects import Money, Quantity


def _make_item(product_id: str = "p-1", qty: int = 1, price: str = "15.00") -> OrderItem:
    """Helper to build a valid item."""
    return OrderItem(
        product_id=product_id,
        quantity=Quantity(qty),
        price=Money.of(price),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create([_make_item(qty=2, price="10.00")])
        assert order.status == OrderStatus.PENDING
        assert len(order.items) == 1
        assert order.total_amount == Money.of("20.00")
        assert order.total_items == 2
        assert order.updated_at is None

    def test_id_is_a_uuid(self):
        order = Order.create([_make_item()])
        assert uuid.UUID(order.id).version == 4

    def test_created_at_is_utc(self):
        order = Order.create([_make_item()])
        assert order.created_at.utcoffset().total_seconds() == 0

    def test_totals_are_sums_over_items(self):
        items = [
            _make_item("p-1", qty=3, price="15.00"),
            _make_item("p-2", qty=5, price="25.00"),
            _make_item("p-3", qty=1, price="0.99"),
        ]
        order = Order.create(items)
        assert order.total_amount == Money.of("170.99")
        assert order.total_items == 9

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create([])

    def test_free_items_allowed(self):
        order = Order.create([_make_item(price="0")])
        assert order.total_amount == Money.zero()


class TestOrderProductIds:

    def test_distinct_in_item_order(self):
        order = Order.create([
            _make_item("p-2"), _make_item("p-1"), _make_item("p-2"),
        ])
        assert order.product_ids == ["p-2", "p-1"]


class TestOrderItem:

    def test_line_total_calculation(self):
        item = _make_item(qty=3, price="15.00")
        assert item.line_total == Money.of("45.00")

    def test_name_is_optional(self):
        assert _make_item().name is None
