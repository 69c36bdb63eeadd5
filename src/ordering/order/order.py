"""Order aggregate: the core of the ordering domain.

State Machine (6 states):
    pending → confirmed → processing → shipping → delivered
    pending | confirmed | processing → cancelled

delivered and cancelled are terminal. Stock is decremented when an order is
confirmed and credited back when an admin cancels an order whose stock was
committed.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.domain import ordering
from ordering.errors import InvalidTransitionError, UnauthorizedError
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPING = "shipping"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CASH = "cash"
    VNPAY = "vnpay"


class CancellationActor(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    OrderStatus.PROCESSING: (OrderStatus.SHIPPING, OrderStatus.CANCELLED),
    OrderStatus.SHIPPING: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),  # Terminal
    OrderStatus.CANCELLED: (),  # Terminal
}

TERMINAL_STATUSES = frozenset(status for status, targets in _VALID_TRANSITIONS.items() if not targets)

STATUS_VALUES = tuple(status.value for status in OrderStatus)


def valid_next_statuses(status):
    """Return the status values reachable from ``status`` in one step."""
    return [target.value for target in _VALID_TRANSITIONS[OrderStatus(status)]]


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Address:
    """Shipping address captured at checkout. Immutable once on the order."""

    full_name = String(required=True, max_length=255)
    phone_number = String(required=True, max_length=30)
    province = String(required=True, max_length=100)
    district = String(required=True, max_length=100)
    ward = String(required=True, max_length=100)
    street = String(required=True, max_length=255)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order. Quantity and unit price are frozen at creation."""

    product_id = Identifier(required=True)
    color = String(required=True, max_length=50)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    address = ValueObject(Address)
    shipping_fee = Float(default=0.0, min_value=0.0)
    total_amount = Float(required=True, min_value=0.0)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_info = Text(default="{}")  # JSON object, gateway metadata
    stock_committed = Boolean(default=False)
    cancelled_by = String(choices=CancellationActor)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, items_data, address, shipping_fee, total_amount, payment_method):
        """Create a pending order.

        Args:
            items_data: List of dicts with product_id, color, size, quantity, price.
            address: Dict with full_name, phone_number, province, district, ward, street.
        """
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            items=[OrderItem(**item) for item in items_data],
            address=Address(**address),
            shipping_fee=shipping_fee,
            total_amount=total_amount,
            payment_method=payment_method,
            status=OrderStatus.PENDING.value,
            payment_info="{}",
            stock_committed=False,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                payment_method=payment_method,
                item_count=len(order.items),
                total_amount=total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES

    def valid_next_statuses(self):
        return valid_next_statuses(self.status)

    def assert_can_transition(self, target_status):
        """Raise InvalidTransitionError unless ``target_status`` is one step away."""
        allowed = self.valid_next_statuses()
        if target_status not in allowed:
            raise InvalidTransitionError(self.status, target_status, allowed)

    def first_item(self):
        return self.items[0] if self.items else None

    def product_ids(self):
        return sorted({str(item.product_id) for item in self.items})

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        """Move the order one step forward.

        Cancellations that need actor checks and stock credit go through cancel().
        """
        self.assert_can_transition(new_status)

        previous = self.status
        now = datetime.now(UTC)
        self.status = new_status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                new_status=new_status,
                changed_at=now,
            )
        )

    def record_stock_committed(self):
        self.stock_committed = True

    def assert_can_cancel(self, actor):
        """Check cancellation rights before any side effect runs."""
        self.assert_can_transition(OrderStatus.CANCELLED.value)

        if not actor.is_admin:
            if not actor.owns(self):
                raise UnauthorizedError("You are not allowed to cancel this order.")
            if OrderStatus(self.status) != OrderStatus.PENDING:
                raise UnauthorizedError("You can only cancel an order while it is pending confirmation.")

    def cancel(self, actor, stock_credited=False):
        """Cancel the order on behalf of ``actor``."""
        self.assert_can_cancel(actor)

        previous = self.status
        now = datetime.now(UTC)
        cancelled_by = CancellationActor.ADMIN.value if actor.is_admin else CancellationActor.CUSTOMER.value

        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by
        if stock_credited:
            self.stock_committed = False
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                cancelled_by=cancelled_by,
                stock_credited=stock_credited,
                cancelled_at=now,
            )
        )
