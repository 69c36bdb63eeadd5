"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Notification")
class NotificationCreated:
    """An order notification was recorded for its owner."""

    __version__ = 1

    notification_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    notification_type = String(required=True)
    created_at = DateTime(required=True)
