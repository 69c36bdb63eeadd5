"""Order notification dispatcher.

Runs after an order's new status has been committed. It persists a
Notification for the owner and pushes an update on the owner's realtime
channel. Both halves are best-effort: failures are logged and reported in
the returned DispatchResult, never raised.
"""

from dataclasses import dataclass, field

import structlog
from protean.utils.globals import current_domain

from ordering import settings
from ordering.inventory.ledger import InventoryLedger
from ordering.notification.notification import Notification
from ordering.order.order import OrderStatus
from ordering.realtime import get_realtime_channel

logger = structlog.get_logger(__name__)

NOTIFICATION_TITLE = "Order update"


@dataclass
class DispatchResult:
    notification_id: str | None = None
    pushed: bool = False
    errors: list[str] = field(default_factory=list)


def short_order_id(order_id) -> str:
    return str(order_id)[-settings.SHORT_ID_LENGTH :]


def status_message(order) -> str:
    short_id = short_order_id(order.id)
    if order.status == OrderStatus.CANCELLED.value:
        return f"Order #{short_id} has been cancelled."
    return f"Order #{short_id} moved to status: {order.status}"


class NotificationDispatcher:
    def __init__(self, ledger: InventoryLedger | None = None, channel_provider=get_realtime_channel):
        self.ledger = ledger or InventoryLedger()
        self.channel_provider = channel_provider

    def _headline(self, order):
        """First item's product name and image, plus a summary line for the whole order."""
        first = order.first_item()
        if first is None:
            return "", None, ""

        product = self.ledger.find_product(first.product_id)
        name = product.name if product else ""
        image = product.image if product else None

        others = len(order.items) - 1
        label = name or "Item"
        if others <= 0:
            summary = label
        else:
            summary = f"{label} and {others} more item{'s' if others > 1 else ''}"
        return name, image, summary

    def order_status_changed(self, order) -> DispatchResult:
        result = DispatchResult()

        try:
            product_name, image, summary = self._headline(order)
        except Exception as exc:
            logger.error("Failed to resolve notification headline", order_id=str(order.id), error=str(exc))
            result.errors.append(f"headline: {exc}")
            product_name, image, summary = "", None, ""

        try:
            notification = Notification.create(
                user_id=str(order.user_id),
                order_id=str(order.id),
                title=NOTIFICATION_TITLE,
                message=status_message(order),
                image=image,
                product_name=product_name,
                summary=summary,
            )
            current_domain.repository_for(Notification).add(notification)
            result.notification_id = str(notification.id)
        except Exception as exc:
            logger.error("Failed to persist order notification", order_id=str(order.id), error=str(exc))
            result.errors.append(f"notification: {exc}")

        channel = self.channel_provider()
        if channel is None:
            logger.debug("No realtime channel configured, skipping push", order_id=str(order.id))
            return result

        payload = {
            "orderId": str(order.id),
            "newStatus": order.status,
            "updatedAt": order.updated_at.isoformat() if order.updated_at else None,
            "image": image,
            "productName": product_name,
            "summary": summary,
        }
        try:
            response = channel.emit(str(order.user_id), settings.REALTIME_EVENT, payload)
            if response.get("status") == "sent":
                result.pushed = True
                logger.info("Emitted order status update", user_id=str(order.user_id), order_id=str(order.id))
            else:
                error = response.get("error", "Unknown realtime error")
                logger.warning("Realtime push failed", order_id=str(order.id), error=error)
                result.errors.append(f"realtime: {error}")
        except Exception as exc:
            logger.error("Realtime push raised", order_id=str(order.id), error=str(exc))
            result.errors.append(f"realtime: {exc}")

        return result
