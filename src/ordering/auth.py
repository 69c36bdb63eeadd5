"""Authenticated caller identity passed explicitly into every service call."""

from dataclasses import dataclass

from ordering import settings


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: str = "customer"

    @property
    def is_admin(self) -> bool:
        return self.role == settings.ADMIN_ROLE

    def owns(self, order) -> bool:
        return str(order.user_id) == str(self.user_id)
