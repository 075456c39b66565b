"""Shipping cost and shipment manifest for the shippable lines of a checkout.

Cost is a flat rate per kilogram; there is no carrier or tier logic.
"""

from dataclasses import dataclass

import structlog

from catalogue.product.product import Product
from shared.exceptions import InvalidInputError

logger = structlog.get_logger(__name__)

FLAT_RATE_PER_KG = 5.0

_RULE = "-" * 44


@dataclass(frozen=True)
class ShipmentItem:
    """A shippable product and the quantity being shipped."""

    product: Product
    quantity: int

    @property
    def total_weight(self) -> float:
        return self.product.weight * self.quantity

    def cost(self, rate_per_kg: float = FLAT_RATE_PER_KG) -> float:
        return self.product.weight * rate_per_kg * self.quantity


@dataclass(frozen=True)
class ShipmentManifest:
    items: tuple[ShipmentItem, ...]
    total_weight: float

    def render(self) -> str:
        lines = []
        if self.items:
            lines.append("------------- Shipment Notice -------------")
            lines.append(f"{'Item':<20} {'Weight(kg)':>10}")
        for item in self.items:
            lines.append(f"{f'{item.quantity}x {item.product.name}':<20} {f'{item.total_weight}kg':>10}")
        lines.append(f"Total package weight: {self.total_weight}kg")
        lines.append(_RULE)
        return "\n".join(lines)


class ShippingService:
    """Prices and ships a fixed set of shippable products.

    The mapping is captured at construction; cost calculation never mutates
    it, and shipping only reports. Inventory is decremented by checkout,
    not here.
    """

    def __init__(self, shippable_items: dict[Product, int], rate_per_kg: float = FLAT_RATE_PER_KG):
        if shippable_items is None:
            raise InvalidInputError({"shippable_items": ["Shippable items cannot be null"]})

        items = []
        for product, quantity in shippable_items.items():
            if not product.is_shippable:
                raise InvalidInputError({"product": [f"Product is not shippable: {product.name}"]})
            items.append(ShipmentItem(product=product, quantity=quantity))

        self.items = tuple(items)
        self.rate_per_kg = rate_per_kg

    def calculate_shipping_cost(self) -> float:
        return sum((item.cost(self.rate_per_kg) for item in self.items), 0.0)

    def manifest(self) -> ShipmentManifest:
        return ShipmentManifest(
            items=self.items,
            total_weight=sum((item.total_weight for item in self.items), 0.0),
        )

    def ship_items(self):
        """Confirm each shipped line and the total shipping cost."""
        for item in self.items:
            logger.info(
                "Shipping item",
                product=item.product.name,
                weight=item.product.weight,
                quantity=item.quantity,
            )
        logger.info("Total shipping cost", shipping_cost=self.calculate_shipping_cost())
