"""Order creation: command, handler and the validating creation service.

The service validates a cart-derived checkout payload in a fixed order,
stopping at the first failure, then processes PlaceOrder. Stock is only
checked here, never reserved; it is decremented when the order is confirmed.
"""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.clearing import ClearCart
from ordering.domain import ordering
from ordering.errors import (
    InsufficientStockError,
    InvalidInputError,
    ProductNotFoundError,
    UnauthenticatedError,
)
from ordering.inventory.ledger import InventoryLedger
from ordering.order.order import Order, PaymentMethod

logger = structlog.get_logger(__name__)

ITEM_FIELDS = ("product_id", "color", "size", "quantity", "price")

# Wire key -> stored Address field
ADDRESS_FIELDS = {
    "fullName": "full_name",
    "phone": "phone_number",
    "province": "province",
    "district": "district",
    "ward": "ward",
    "street": "street",
}


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    address = Text(required=True)  # JSON: address dict
    shipping_fee = Float(default=0.0)
    total_amount = Float(required=True)
    payment_method = String(max_length=20, default=PaymentMethod.CASH.value)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.create(
            user_id=command.user_id,
            items_data=json.loads(command.items),
            address=json.loads(command.address),
            shipping_fee=command.shipping_fee or 0.0,
            total_amount=command.total_amount,
            payment_method=command.payment_method or PaymentMethod.CASH.value,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)


def product_ref(value):
    """Accept a bare product id or an object carrying ``_id``."""
    if isinstance(value, dict):
        value = value.get("_id")
    return str(value) if value else None


def _is_number(value):
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class OrderCreationService:
    def __init__(self, ledger: InventoryLedger | None = None):
        self.ledger = ledger or InventoryLedger()

    # -------------------------------------------------------------------
    # Validation steps
    # -------------------------------------------------------------------
    def _validate_items(self, items):
        if not isinstance(items, list) or not items:
            raise InvalidInputError("Item list is invalid.")

        normalized = []
        for index, item in enumerate(items):
            item = item if isinstance(item, dict) else {}
            product_id = product_ref(item.get("product_id"))
            color, size = item.get("color"), item.get("size")
            quantity, price = item.get("quantity"), item.get("price")

            if (
                not product_id
                or not color
                or not size
                or not _is_positive_int(quantity)
                or not _is_number(price)
                or price <= 0
            ):
                raise InvalidInputError(
                    f"Each item must have: {', '.join(ITEM_FIELDS)}.",
                    item_index=index,
                    item_error=items[index],
                )

            normalized.append(
                {
                    "product_id": product_id,
                    "color": str(color),
                    "size": str(size),
                    "quantity": quantity,
                    "price": float(price),
                }
            )
        return normalized

    def _validate_stock(self, items):
        for item in items:
            product = self.ledger.find_product(item["product_id"])
            if product is None:
                raise ProductNotFoundError("Product not found.", product_id=item["product_id"])

            if not self.ledger.check_availability(item["product_id"], item["color"], item["size"], item["quantity"]):
                remaining = product.stock_of(item["color"], item["size"])
                raise InsufficientStockError(
                    f"Product {product.name} ({item['color']} - {item['size']}) does not have enough stock. "
                    f"Remaining: {remaining}",
                    remaining=remaining,
                    product_id=item["product_id"],
                )

    def _validate_address(self, address):
        if not isinstance(address, dict) or not all(
            isinstance(address.get(key), str) and address.get(key).strip() for key in ADDRESS_FIELDS
        ):
            raise InvalidInputError(
                f"Shipping address is incomplete (required: {', '.join(ADDRESS_FIELDS)})."
            )
        return {stored: address[key].strip() for key, stored in ADDRESS_FIELDS.items()}

    def _validate_amounts(self, shipping_fee, total_amount):
        if not _is_number(shipping_fee) or not _is_number(total_amount) or total_amount < 0:
            raise InvalidInputError("shipping_fee and total_amount must be valid numbers.")

    # -------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------
    def place(self, actor, items, address, shipping_fee, total_amount, payment_method=None, clear_cart=True):
        """Validate and persist a new pending order. Returns the stored Order."""
        if actor is None or not actor.user_id:
            raise UnauthenticatedError("User is not authenticated.")

        normalized_items = self._validate_items(items)
        self._validate_stock(normalized_items)
        stored_address = self._validate_address(address)
        self._validate_amounts(shipping_fee, total_amount)

        payment_method = payment_method or PaymentMethod.CASH.value
        if not isinstance(payment_method, str) or payment_method not in {method.value for method in PaymentMethod}:
            raise InvalidInputError(f"Unsupported payment method: {payment_method}.")

        order_id = current_domain.process(
            PlaceOrder(
                user_id=actor.user_id,
                items=json.dumps(normalized_items),
                address=json.dumps(stored_address),
                shipping_fee=float(shipping_fee),
                total_amount=float(total_amount),
                payment_method=payment_method,
            ),
            asynchronous=False,
        )
        logger.info(
            "Order placed",
            order_id=order_id,
            user_id=str(actor.user_id),
            payment_method=payment_method,
            items=len(normalized_items),
        )

        if clear_cart:
            self._clear_cart(actor.user_id)

        return current_domain.repository_for(Order).get(order_id)

    def place_cash_order(self, actor, items, address, shipping_fee, total_amount, payment_method=None):
        return self.place(actor, items, address, shipping_fee, total_amount, payment_method, clear_cart=True)

    def place_vnpay_order(self, actor, items, address, shipping_fee, total_amount):
        # The gateway flow keeps the cart until payment completes
        return self.place(
            actor,
            items,
            address,
            shipping_fee,
            total_amount,
            PaymentMethod.VNPAY.value,
            clear_cart=False,
        )

    def _clear_cart(self, user_id):
        try:
            removed = current_domain.process(ClearCart(user_id=str(user_id)), asynchronous=False)
            logger.info("Cart emptied after order", user_id=str(user_id), removed_lines=removed)
        except Exception as exc:
            logger.error("Could not empty cart after order", user_id=str(user_id), error=str(exc))
