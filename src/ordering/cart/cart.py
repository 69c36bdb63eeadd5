"""Cart aggregate: the per-user list of items waiting to be ordered.

The ordering side only ever needs two things from a cart: seeding it with
items and emptying it once an order has been placed.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import CartEmptied, CartItemAdded
from ordering.domain import ordering


@ordering.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    color = String(required=True, max_length=50)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)
    price = Float(default=0.0, min_value=0.0)


@ordering.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    def add_item(self, product_id, color, size, quantity, price=0.0):
        """Add a line, or grow the quantity of a matching (product, color, size) line."""
        existing = next(
            (
                line
                for line in self.items
                if str(line.product_id) == str(product_id) and line.color == color and line.size == size
            ),
            None,
        )
        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartLine(
                    product_id=product_id,
                    color=color,
                    size=size,
                    quantity=quantity,
                    price=price,
                )
            )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def empty(self):
        """Remove every line. Returns the number of lines removed."""
        lines = list(self.items)
        for line in lines:
            self.remove_items(line)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            CartEmptied(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                removed_lines=len(lines),
                emptied_at=now,
            )
        )
        return len(lines)
