"""Runtime settings for the Ordering domain, read from the environment."""

import os

ADMIN_ROLE = os.getenv("ORDERING_ADMIN_ROLE", "admin")

# Event name pushed on the owner's realtime channel after a status change
REALTIME_EVENT = os.getenv("ORDERING_REALTIME_EVENT", "orderStatusUpdated")

# Notification messages embed only the tail of the order id
SHORT_ID_LENGTH = 6
