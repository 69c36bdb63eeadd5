"""Request-level order lifecycle operations used by the HTTP layer.

Stock-touching commands run while holding the stock locks of every product
on the order, so the whole unit of work, commit included, is serialised
against other requests for the same products. Notifications are dispatched
only after the command has committed.
"""

import structlog
from protean.utils.globals import current_domain

from ordering.errors import InvalidInputError, InvalidTransitionError, UnauthenticatedError, UnauthorizedError
from ordering.inventory.ledger import stock_locks
from ordering.notification.dispatcher import NotificationDispatcher
from ordering.order.cancellation import CancelOrder
from ordering.order.order import STATUS_VALUES
from ordering.order.repository import get_order
from ordering.order.status import ADMIN_ONLY_MESSAGE, ChangeOrderStatus

logger = structlog.get_logger(__name__)


class OrderLifecycle:
    def __init__(self, dispatcher: NotificationDispatcher | None = None, locks=stock_locks):
        self.dispatcher = dispatcher or NotificationDispatcher()
        self.locks = locks

    def _run_locked(self, order_id, command):
        order = get_order(order_id)
        with self.locks.hold(*order.product_ids()):
            current_domain.process(command, asynchronous=False)

        order = get_order(order_id)
        result = self.dispatcher.order_status_changed(order)
        if result.errors:
            logger.warning("Order notification incomplete", order_id=str(order.id), errors=result.errors)
        return order

    def _reject_unknown_status(self, actor, order_id, new_status):
        """Statuses outside the lifecycle are never a valid next step."""
        order = get_order(order_id)
        if not actor.is_admin:
            raise UnauthorizedError(ADMIN_ONLY_MESSAGE)
        raise InvalidTransitionError(order.status, new_status, order.valid_next_statuses())

    def change_status(self, actor, order_id, new_status):
        if actor is None or not actor.user_id:
            raise UnauthenticatedError("User is not authenticated.")
        if not isinstance(new_status, str) or not new_status.strip():
            raise InvalidInputError("A target status is required.")
        if new_status not in STATUS_VALUES:
            self._reject_unknown_status(actor, order_id, new_status)
        return self._run_locked(
            order_id,
            ChangeOrderStatus(
                order_id=str(order_id),
                status=new_status,
                actor_id=actor.user_id,
                actor_role=actor.role,
            ),
        )

    def cancel(self, actor, order_id):
        if actor is None or not actor.user_id:
            raise UnauthenticatedError("User is not authenticated.")
        return self._run_locked(
            order_id,
            CancelOrder(
                order_id=str(order_id),
                actor_id=actor.user_id,
                actor_role=actor.role,
            ),
        )
