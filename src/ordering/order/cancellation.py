"""Order cancellation: command and handler.

Owners may cancel only while the order is pending. Admins may cancel any
non-terminal order; when the order's stock was already decremented, every
line is credited back to its variant and product totals.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.auth import Actor
from ordering.domain import ordering
from ordering.inventory.ledger import InventoryLedger, StockDelta
from ordering.order.order import Order
from ordering.order.repository import get_order


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(max_length=50, default="customer")


def cancel_with_stock_credit(order, actor, ledger=None):
    """Cancel ``order`` for ``actor``, crediting stock back when an admin cancels committed stock."""
    order.assert_can_cancel(actor)

    credited = False
    if actor.is_admin and order.stock_committed:
        ledger = ledger or InventoryLedger()
        ledger.credit_back(
            StockDelta(str(item.product_id), item.color, item.size, item.quantity) for item in order.items
        )
        credited = True

    order.cancel(actor, stock_credited=credited)
    return credited


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = get_order(command.order_id)
        cancel_with_stock_credit(order, Actor(str(command.actor_id), command.actor_role or "customer"))
        current_domain.repository_for(Order).add(order)
        return str(order.id)
