"""Order repository with the read queries used by listing endpoints."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import OrderNotFoundError
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id, status=None) -> list[Order]:
        criteria = {"user_id": str(user_id)}
        if status:
            criteria["status"] = status
        return self._dao.query.filter(**criteria).all().items

    def find_all(self, status=None) -> list[Order]:
        if status:
            return self._dao.query.filter(status=status).all().items
        return self._dao.query.all().items


def get_order(order_id) -> Order:
    """Load an order or raise OrderNotFoundError."""
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise OrderNotFoundError("Order not found.", order_id=str(order_id)) from None
