"""Tests for the ordering error taxonomy."""

import pytest
from ordering.auth import Actor
from ordering.errors import (
    InsufficientStockError,
    InternalFailureError,
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "error_cls,status",
    [
        (UnauthenticatedError, 401),
        (UnauthorizedError, 403),
        (InvalidInputError, 400),
        (NotFoundError, 404),
        (ProductNotFoundError, 404),
        (OrderNotFoundError, 404),
        (InternalFailureError, 500),
    ],
)
def test_status_codes(error_cls, status):
    assert error_cls("boom").status_code == status


def test_details_are_merged_into_payload():
    error = InvalidInputError("Each item must have: product_id.", item_index=1, item_error={"color": "red"})
    assert error.to_dict() == {
        "message": "Each item must have: product_id.",
        "item_index": 1,
        "item_error": {"color": "red"},
    }


def test_insufficient_stock_carries_remaining():
    error = InsufficientStockError("Out of stock.", remaining=2, product_id="p1")
    assert error.status_code == 400
    assert error.remaining == 2
    assert error.to_dict()["remaining"] == 2


def test_invalid_transition_payload():
    error = InvalidTransitionError("shipping", "confirmed", ["delivered"])
    payload = error.to_dict()
    assert payload["valid_next_statuses"] == ["delivered"]
    assert payload["current_status"] == "shipping"
    assert "delivered" in payload["message"]


def test_not_found_family():
    assert issubclass(OrderNotFoundError, NotFoundError)
    assert issubclass(ProductNotFoundError, NotFoundError)


class TestActor:
    def test_admin_role(self):
        assert Actor("a", "admin").is_admin
        assert not Actor("a").is_admin

    def test_owns(self):
        order = type("O", (), {"user_id": "user-001"})()
        assert Actor("user-001").owns(order)
        assert not Actor("user-002").owns(order)
