"""Ordering bounded context: orders, inventory adjustment, carts and order notifications.

Handles order creation (cash and VNPay), the order status lifecycle, stock
decrement/credit-back on confirmation and cancellation, and the realtime
notifications pushed to the order's owner.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
