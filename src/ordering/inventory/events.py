"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductStocked:
    """A product was registered with its initial variant stock."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    quantity = Integer(required=True)
    stocked_at = DateTime(required=True)


@ordering.event(part_of="Product")
class StockAdjusted:
    """A signed quantity delta was applied to one (color, size) variant."""

    __version__ = 1

    product_id = Identifier(required=True)
    color = String(required=True)
    size = String(required=True)
    delta = Integer(required=True)
    variant_quantity = Integer(required=True)
    product_quantity = Integer(required=True)
    adjusted_at = DateTime(required=True)
