"""Notification aggregate: write-once record of an order update for its owner."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from ordering.domain import ordering
from ordering.notification.events import NotificationCreated


class NotificationType(Enum):
    ORDER = "order"


@ordering.aggregate
class Notification:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    notification_type = String(choices=NotificationType, default=NotificationType.ORDER.value)
    title = String(required=True, max_length=255)
    message = Text(required=True)
    image = String(max_length=1000)
    product_name = String(max_length=255)
    summary = String(max_length=500)
    read = Boolean(default=False)
    created_at = DateTime()

    @classmethod
    def create(cls, user_id, order_id, title, message, image=None, product_name=None, summary=None):
        now = datetime.now(UTC)

        notification = cls(
            user_id=user_id,
            order_id=order_id,
            notification_type=NotificationType.ORDER.value,
            title=title,
            message=message,
            image=image,
            product_name=product_name,
            summary=summary,
            read=False,
            created_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                order_id=str(order_id),
                notification_type=NotificationType.ORDER.value,
                created_at=now,
            )
        )
        return notification
