"""Product aggregate with stock-tracked (color, size) variations.

The product keeps two counters in step: each Variation's quantity and the
product-level total. Both move by the same signed delta on every adjustment.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String

from ordering.domain import ordering
from ordering.inventory.events import ProductStocked, StockAdjusted


@ordering.entity(part_of="Product")
class Variation:
    color = String(required=True, max_length=50)
    size = String(required=True, max_length=20)
    quantity = Integer(default=0, min_value=0)

    def matches(self, color, size):
        return self.color == color and self.size == size


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    image = String(max_length=1000)
    price = Float(default=0.0, min_value=0.0)
    quantity = Integer(default=0)
    variations = HasMany(Variation)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price=0.0, image=None, variations=None):
        """Register a product with its initial variant stock.

        Args:
            variations: List of dicts with color, size, quantity.
        """
        now = datetime.now(UTC)
        variations = variations or []

        product = cls(
            name=name,
            image=image,
            price=price,
            quantity=sum(int(v.get("quantity", 0)) for v in variations),
            variations=[Variation(**v) for v in variations],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductStocked(
                product_id=str(product.id),
                name=name,
                quantity=product.quantity,
                stocked_at=now,
            )
        )
        return product

    def variation_for(self, color, size):
        return next((v for v in self.variations if v.matches(color, size)), None)

    def stock_of(self, color, size):
        variation = self.variation_for(color, size)
        return variation.quantity if variation else 0

    def adjust_stock(self, color, size, delta):
        """Apply a signed delta to one variation and to the product total."""
        variation = self.variation_for(color, size)
        if variation is None:
            raise ValidationError({"variation": [f"Variation ({color} - {size}) does not exist"]})
        if variation.quantity + delta < 0:
            raise ValidationError({"quantity": [f"Variation ({color} - {size}) cannot go below zero"]})

        now = datetime.now(UTC)
        variation.quantity = variation.quantity + delta
        self.quantity = (self.quantity or 0) + delta
        self.updated_at = now

        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                color=color,
                size=size,
                delta=delta,
                variant_quantity=variation.quantity,
                product_quantity=self.quantity,
                adjusted_at=now,
            )
        )
