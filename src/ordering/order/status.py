"""Order status changes: command and handler.

Confirming a pending order decrements every line's variant and product
stock in one all-or-nothing adjustment. A shortage on any line aborts the
whole transition with nothing decremented.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.auth import Actor
from ordering.domain import ordering
from ordering.errors import InsufficientStockError, ProductNotFoundError, UnauthorizedError
from ordering.inventory.ledger import InventoryLedger, StockDelta
from ordering.order.cancellation import cancel_with_stock_credit
from ordering.order.order import Order, OrderStatus
from ordering.order.repository import get_order

ADMIN_ONLY_MESSAGE = "Only administrators can update order status."


@ordering.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=255)
    actor_id = Identifier(required=True)
    actor_role = String(max_length=50, default="customer")


def commit_stock(order, ledger=None):
    """Decrement stock for every line of ``order`` or nothing at all."""
    ledger = ledger or InventoryLedger()
    try:
        ledger.apply_deltas(
            StockDelta(str(item.product_id), item.color, item.size, -item.quantity) for item in order.items
        )
    except ProductNotFoundError as exc:
        raise InsufficientStockError(f"{exc.message} Not enough stock to confirm the order.", remaining=0) from exc
    order.record_stock_committed()


@ordering.command_handler(part_of=Order)
class ChangeOrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_status(self, command):
        actor = Actor(str(command.actor_id), command.actor_role or "customer")
        if not actor.is_admin:
            raise UnauthorizedError(ADMIN_ONLY_MESSAGE)

        order = get_order(command.order_id)

        if command.status == OrderStatus.CANCELLED.value:
            cancel_with_stock_credit(order, actor)
        else:
            order.assert_can_transition(command.status)
            if order.status == OrderStatus.PENDING.value and command.status == OrderStatus.CONFIRMED.value:
                commit_stock(order)
            order.change_status(command.status)

        current_domain.repository_for(Order).add(order)
        return str(order.id)
