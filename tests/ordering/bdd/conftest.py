"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.auth import Actor
from ordering.errors import OrderingError
from ordering.inventory.product import Product
from ordering.notification.notification import Notification
from ordering.order.creation import OrderCreationService
from ordering.order.lifecycle import OrderLifecycle
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then, when

ADMIN = Actor(user_id="admin-001", role="admin")


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the domain error raised by a When step."""
    return {"exc": None}


@pytest.fixture()
def lifecycle():
    return OrderLifecycle()


def _items(product_id, quantity, color, size):
    return [{"product_id": product_id, "color": color, "size": size, "quantity": quantity, "price": 100.0}]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a product "{name}" with {quantity:d} units of "{color}" "{size}"'),
    target_fixture="product_id",
)
def _(name, quantity, color, size):
    product = Product.create(name=name, price=100.0, variations=[{"color": color, "size": size, "quantity": quantity}])
    current_domain.repository_for(Product).add(product)
    return str(product.id)


@given(
    parsers.cfparse('customer "{user_id}" placed an order for {quantity:d} units of "{color}" "{size}"'),
    target_fixture="order_id",
)
def _(product_id, address, user_id, quantity, color, size):
    order = OrderCreationService().place_cash_order(
        Actor(user_id), _items(product_id, quantity, color, size), address, 0, quantity * 100.0
    )
    return str(order.id)


@given(parsers.cfparse('another order for {quantity:d} units of "{color}" "{size}" was confirmed'))
def _(product_id, address, lifecycle, quantity, color, size):
    order = OrderCreationService().place_cash_order(
        Actor("user-other"), _items(product_id, quantity, color, size), address, 0, quantity * 100.0
    )
    lifecycle.change_status(ADMIN, str(order.id), "confirmed")


@given(parsers.cfparse('the order has moved through "{statuses}"'))
def _(order_id, lifecycle, statuses):
    for status in statuses.split(","):
        lifecycle.change_status(ADMIN, order_id, status.strip())


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('an admin changes the order status to "{status}"'))
def _(order_id, lifecycle, error, status):
    try:
        lifecycle.change_status(ADMIN, order_id, status)
    except OrderingError as exc:
        error["exc"] = exc


@when(parsers.cfparse('customer "{user_id}" cancels the order'))
def _(order_id, lifecycle, error, user_id):
    try:
        lifecycle.cancel(Actor(user_id), order_id)
    except OrderingError as exc:
        error["exc"] = exc


@when("an admin cancels the order")
def _(order_id, lifecycle, error):
    try:
        lifecycle.cancel(ADMIN, order_id)
    except OrderingError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('the stock of "{color}" "{size}" is {quantity:d}'))
def _(product_id, color, size, quantity):
    product = current_domain.repository_for(Product).get(product_id)
    assert product.stock_of(color, size) == quantity


@then(parsers.cfparse('customer "{user_id}" has {count:d} notification(s)'))
def _(user_id, count):
    notifications = current_domain.repository_for(Notification)._dao.query.filter(user_id=user_id).all().items
    assert len(notifications) == count


@then(parsers.cfparse('the request is rejected with status {status_code:d}'))
def _(error, status_code):
    assert error["exc"] is not None
    assert error["exc"].status_code == status_code


@then(parsers.cfparse("the error reports {remaining:d} remaining"))
def _(error, remaining):
    assert error["exc"].remaining == remaining


@then(parsers.cfparse('the valid next statuses are "{statuses}"'))
def _(error, statuses):
    expected = [s.strip() for s in statuses.split(",") if s.strip()]
    assert error["exc"].details["valid_next_statuses"] == expected
