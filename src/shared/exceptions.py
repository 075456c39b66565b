"""Error taxonomy shared by every bounded context.

Every error is a ``protean.exceptions.ValidationError`` carrying a
``messages`` dict keyed by the offending field or entity, e.g.
``{"quantity": ["Quantity must be greater than zero"]}``. Field and
invariant failures raised by protean itself arrive as a plain
``ValidationError`` and belong to the invalid-input kind; the subclasses
below name the outcomes callers branch on.
"""

from protean.exceptions import ValidationError


class ShopStreamError(ValidationError):
    """Base class for all domain errors."""


class InvalidInputError(ShopStreamError):
    """A required value is missing or malformed."""


class NotFoundError(ShopStreamError):
    """The referenced product is not in the cart."""


class CapacityExceededError(ShopStreamError):
    """A requested quantity is larger than the product's available stock."""


class CheckoutError(ShopStreamError):
    """Base class for failures raised by the checkout gates."""


class EmptyCartError(CheckoutError):
    """The customer's cart has no line items to check out."""


class InsufficientStockError(CheckoutError):
    """Live stock is below the quantity reserved in the cart."""


class OutOfStockError(InsufficientStockError):
    """Live stock has dropped to zero."""


class ExpiredProductError(CheckoutError):
    """A perishable product in the cart is past its expiration date."""


class InsufficientBalanceError(CheckoutError):
    """The total cost exceeds what the customer can pay."""
