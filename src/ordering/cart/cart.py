"""Shopping Cart: the customer's reserved line items and their running cost.

The cart holds one line per product. A reservation is checked against the
product's stock at the moment it is made; checkout re-checks it against the
live stock later, so the two may legitimately diverge in between.

Lines and the running total are private. They change only through ``add``,
``remove``, ``update_product_quantity`` and ``clear``, so the total always
equals the sum of the line totals.
"""

from dataclasses import dataclass, replace

import structlog
from pydantic import PrivateAttr

from catalogue.product.product import Product
from ordering.domain import ordering
from shared.exceptions import CapacityExceededError, InvalidInputError, NotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartItem:
    """A (product, reserved quantity) line in the cart."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@ordering.aggregate
class Cart:
    _items: list[CartItem] = PrivateAttr(default_factory=list)
    _items_total_cost: float = PrivateAttr(default=0.0)

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def items_total_cost(self) -> float:
        return self._items_total_cost

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _find(self, product):
        return next((i for i in self._items if i.product is product), None)

    def _replace_line(self, old, new):
        self._items[self._items.index(old)] = new

    @staticmethod
    def _require_product(product):
        if product is None:
            raise InvalidInputError({"product": ["Product cannot be null"]})

    @staticmethod
    def _require_positive(quantity):
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidInputError({"quantity": ["Quantity must be a whole number"]})
        if quantity <= 0:
            raise InvalidInputError({"quantity": ["Quantity must be greater than zero"]})

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add(self, product, quantity):
        """Reserve ``quantity`` more of ``product`` (or start a new line)."""
        self._require_product(product)
        self._require_positive(quantity)

        existing = self._find(product)
        total_quantity = (existing.quantity if existing else 0) + quantity
        if total_quantity > product.quantity:
            raise CapacityExceededError(
                {"quantity": [f"Insufficient quantity available for product: {product.name}"]}
            )

        if existing:
            self._replace_line(existing, replace(existing, quantity=total_quantity))
        else:
            self._items.append(CartItem(product=product, quantity=total_quantity))
        self._items_total_cost += product.price * quantity

        logger.info(
            "Added product to cart",
            product=product.name,
            quantity=quantity,
            items_total_cost=self._items_total_cost,
        )

    def remove(self, product):
        """Drop the product's line and release its cost."""
        self._require_product(product)

        item = self._find(product)
        if item is None:
            raise NotFoundError({"product": [f"Product not found in cart: {product.name}"]})

        self._items_total_cost -= product.price * item.quantity
        self._items.remove(item)

        logger.info(
            "Removed product from cart",
            product=product.name,
            items_total_cost=self._items_total_cost,
        )

    def update_product_quantity(self, product, quantity):
        """Replace the reservation for a product already in the cart."""
        self._require_product(product)
        self._require_positive(quantity)

        item = self._find(product)
        if item is None:
            raise NotFoundError({"product": [f"Product not found in cart: {product.name}"]})
        if quantity > product.quantity:
            raise CapacityExceededError(
                {"quantity": [f"Insufficient quantity available for product: {product.name}"]}
            )

        self._items_total_cost -= product.price * item.quantity
        self._replace_line(item, replace(item, quantity=quantity))
        self._items_total_cost += product.price * quantity

        logger.info(
            "Updated product quantity in cart",
            product=product.name,
            quantity=quantity,
            items_total_cost=self._items_total_cost,
        )

    def clear(self):
        self._items.clear()
        self._items_total_cost = 0.0

        logger.info("Cart cleared", items_total_cost=self._items_total_cost)

    # -------------------------------------------------------------------
    # Read views
    # -------------------------------------------------------------------
    def is_empty(self) -> bool:
        return not self._items

    @property
    def products(self) -> dict[Product, int]:
        """Product -> reserved quantity."""
        return {item.product: item.quantity for item in self._items}

    def quantity_of(self, product) -> int:
        item = self._find(product)
        return item.quantity if item else 0

    def __str__(self):
        lines = ["Cart:"]
        lines.extend(f"{i.product.name} - Quantity: {i.quantity}, Price: {i.product.price}" for i in self._items)
        lines.append(f"Total Price: {self._items_total_cost}")
        return "\n".join(lines)
