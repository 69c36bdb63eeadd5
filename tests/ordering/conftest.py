import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def setup_db(ordering_bed):
    from ordering.domain import ordering
    from ordering.utils.db import drop_db, setup_db

    setup_db(ordering)

    yield

    drop_db(ordering)


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def realtime():
    """A fresh in-memory realtime channel for every test."""
    from ordering.realtime import reset_realtime_channel, set_realtime_channel
    from ordering.realtime.fake import FakeRealtimeAdapter

    adapter = FakeRealtimeAdapter()
    set_realtime_channel(adapter)
    yield adapter
    reset_realtime_channel()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
ADDRESS = {
    "fullName": "Nguyen Van A",
    "phone": "0901234567",
    "province": "Ho Chi Minh",
    "district": "District 1",
    "ward": "Ben Nghe",
    "street": "12 Le Loi",
}


@pytest.fixture()
def address():
    return dict(ADDRESS)


@pytest.fixture()
def make_product():
    """Persist a product with one or more (color, size, quantity) variations."""
    from ordering.inventory.product import Product
    from protean import current_domain

    def _make(name="Linen Shirt", price=199000.0, image="https://cdn.example.com/shirt.jpg", variations=None):
        product = Product.create(
            name=name,
            price=price,
            image=image,
            variations=variations or [{"color": "red", "size": "M", "quantity": 5}],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    return _make


@pytest.fixture()
def customer():
    from ordering.auth import Actor

    return Actor(user_id="user-001")


@pytest.fixture()
def admin():
    from ordering.auth import Actor

    return Actor(user_id="admin-001", role="admin")


@pytest.fixture()
def place_order(address):
    """Place a pending cash order for ``actor`` through the creation service."""
    from ordering.order.creation import OrderCreationService

    def _place(actor, product_id, quantity=3, color="red", size="M", extra_items=None):
        items = [{"product_id": product_id, "color": color, "size": size, "quantity": quantity, "price": 100.0}]
        items.extend(extra_items or [])
        total = sum(item["quantity"] * item["price"] for item in items)
        order = OrderCreationService().place_cash_order(actor, items, address, 0, total)
        return str(order.id)

    return _place
