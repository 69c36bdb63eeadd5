"""Order read side: listing and detail views with product-enriched items.

Items keep the price captured at order time. Product name and image are
looked up at read time, so a removed product still renders with fallbacks.
"""

import json

from protean.utils.globals import current_domain

from ordering.errors import UnauthenticatedError, UnauthorizedError
from ordering.inventory.ledger import InventoryLedger
from ordering.order.order import STATUS_VALUES, Order
from ordering.order.repository import get_order

UNKNOWN_PRODUCT_NAME = "Product unavailable"


def _require_actor(actor):
    if actor is None or not actor.user_id:
        raise UnauthenticatedError("User is not authenticated.")


def _known_status(status):
    """Unknown status filters are ignored rather than rejected."""
    return status if status in STATUS_VALUES else None


class OrderQueries:
    def __init__(self, ledger: InventoryLedger | None = None):
        self.ledger = ledger or InventoryLedger()

    def _enrich_item(self, item, products):
        product_id = str(item.product_id)
        if product_id not in products:
            products[product_id] = self.ledger.find_product(product_id)
        product = products[product_id]

        return {
            "id": str(item.id),
            "product_id": product_id,
            "color": item.color,
            "size": item.size,
            "quantity": item.quantity,
            "price": item.price,
            "productName": product.name if product else UNKNOWN_PRODUCT_NAME,
            "imageUrl": (product.image or "") if product else "",
            "unitPrice": item.price or (product.price if product else 0) or 0,
        }

    def to_view(self, order, products=None) -> dict:
        products = {} if products is None else products
        address = order.address
        return {
            "id": str(order.id),
            "user_id": str(order.user_id),
            "items": [self._enrich_item(item, products) for item in order.items],
            "address": {
                "full_name": address.full_name,
                "phone_number": address.phone_number,
                "province": address.province,
                "district": address.district,
                "ward": address.ward,
                "street": address.street,
            }
            if address
            else None,
            "shipping_fee": order.shipping_fee,
            "total_amount": order.total_amount,
            "payment_method": order.payment_method,
            "status": order.status,
            "payment_info": json.loads(order.payment_info or "{}"),
            "cancelled_by": order.cancelled_by,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }

    def _views(self, orders, newest_first=True):
        products = {}
        ordered = sorted(orders, key=lambda o: o.created_at, reverse=newest_first)
        return [self.to_view(order, products) for order in ordered]

    def list_for_user(self, actor, status=None) -> list[dict]:
        """The caller's own orders, newest first, optionally filtered by status."""
        _require_actor(actor)
        orders = current_domain.repository_for(Order).find_for_user(actor.user_id, _known_status(status))
        return self._views(orders)

    def get_for(self, actor, order_id) -> dict:
        """One order, visible to its owner and to admins."""
        _require_actor(actor)
        order = get_order(order_id)
        if not actor.is_admin and not actor.owns(order):
            raise UnauthorizedError("You are not allowed to view this order.")
        return self.to_view(order)

    def list_all(self, actor, status=None, sort="desc") -> list[dict]:
        """Every order, for admins. ``sort="asc"`` lists oldest first."""
        _require_actor(actor)
        if not actor.is_admin:
            raise UnauthorizedError("Only administrators can list all orders.")
        orders = current_domain.repository_for(Order).find_all(_known_status(status))
        return self._views(orders, newest_first=sort != "asc")
