"""Application tests for order listing and detail queries."""

import pytest
from ordering.auth import Actor
from ordering.errors import OrderNotFoundError, UnauthenticatedError, UnauthorizedError
from ordering.inventory.product import Product
from ordering.order.lifecycle import OrderLifecycle
from ordering.order.queries import UNKNOWN_PRODUCT_NAME, OrderQueries
from protean import current_domain


class TestListForUser:
    def test_only_own_orders_newest_first(self, make_product, place_order, customer):
        product_id = make_product()
        first = place_order(customer, product_id, quantity=1)
        second = place_order(customer, product_id, quantity=2)
        place_order(Actor("user-002"), product_id, quantity=1)

        views = OrderQueries().list_for_user(customer)

        assert [view["id"] for view in views] == [second, first]

    def test_items_are_enriched(self, make_product, place_order, customer):
        product_id = make_product()
        place_order(customer, product_id, quantity=1)

        item = OrderQueries().list_for_user(customer)[0]["items"][0]

        assert item["productName"] == "Linen Shirt"
        assert item["imageUrl"] == "https://cdn.example.com/shirt.jpg"
        assert item["unitPrice"] == 100.0
        assert item["price"] == 100.0

    def test_removed_product_uses_fallbacks(self, make_product, place_order, customer):
        product_id = make_product()
        place_order(customer, product_id, quantity=1)
        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(product_id))

        item = OrderQueries().list_for_user(customer)[0]["items"][0]

        assert item["productName"] == UNKNOWN_PRODUCT_NAME
        assert item["imageUrl"] == ""
        assert item["unitPrice"] == 100.0

    def test_status_filter(self, make_product, place_order, customer, admin):
        product_id = make_product()
        pending = place_order(customer, product_id, quantity=1)
        confirmed = place_order(customer, product_id, quantity=1)
        OrderLifecycle().change_status(admin, confirmed, "confirmed")

        queries = OrderQueries()
        assert [v["id"] for v in queries.list_for_user(customer, status="pending")] == [pending]
        assert [v["id"] for v in queries.list_for_user(customer, status="confirmed")] == [confirmed]

    def test_unknown_status_filter_is_ignored(self, make_product, place_order, customer):
        product_id = make_product()
        place_order(customer, product_id, quantity=1)
        place_order(customer, product_id, quantity=1)

        assert len(OrderQueries().list_for_user(customer, status="lost")) == 2

    def test_requires_actor(self):
        with pytest.raises(UnauthenticatedError):
            OrderQueries().list_for_user(None)


class TestGetFor:
    def test_owner_sees_order(self, make_product, place_order, customer):
        order_id = place_order(customer, make_product(), quantity=1)

        view = OrderQueries().get_for(customer, order_id)

        assert view["id"] == order_id
        assert view["address"]["full_name"] == "Nguyen Van A"
        assert view["payment_info"] == {}

    def test_admin_sees_any_order(self, make_product, place_order, customer, admin):
        order_id = place_order(customer, make_product(), quantity=1)
        assert OrderQueries().get_for(admin, order_id)["user_id"] == "user-001"

    def test_other_customer_forbidden(self, make_product, place_order, customer):
        order_id = place_order(customer, make_product(), quantity=1)
        with pytest.raises(UnauthorizedError):
            OrderQueries().get_for(Actor("user-002"), order_id)

    def test_missing_order(self, customer):
        with pytest.raises(OrderNotFoundError):
            OrderQueries().get_for(customer, "missing-order")


class TestListAll:
    def test_admin_lists_everyone(self, make_product, place_order, customer, admin):
        product_id = make_product()
        first = place_order(customer, product_id, quantity=1)
        second = place_order(Actor("user-002"), product_id, quantity=1)

        queries = OrderQueries()
        assert [v["id"] for v in queries.list_all(admin)] == [second, first]
        assert [v["id"] for v in queries.list_all(admin, sort="asc")] == [first, second]

    def test_status_filter(self, make_product, place_order, customer, admin):
        product_id = make_product()
        place_order(customer, product_id, quantity=1)
        cancelled = place_order(customer, product_id, quantity=1)
        OrderLifecycle().cancel(customer, cancelled)

        views = OrderQueries().list_all(admin, status="cancelled")

        assert [v["id"] for v in views] == [cancelled]
        assert views[0]["cancelled_by"] == "customer"

    def test_customer_forbidden(self, customer):
        with pytest.raises(UnauthorizedError):
            OrderQueries().list_all(customer)
