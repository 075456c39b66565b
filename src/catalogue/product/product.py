"""Product aggregate with an explicit capability set.

A product is a priced, stock-tracked record. Physical shipping and shelf
life are attached as capabilities rather than subclasses:

    weight           -> Shippable
    expiration_date  -> Expirable

Checkout code asks ``product.is_shippable`` / ``product.is_expirable``
instead of testing the product's type.
"""

from datetime import date
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, Float, Integer, String

from catalogue.domain import catalogue
from shared.exceptions import InvalidInputError


class Capability(Enum):
    """Optional behaviours a product can carry."""

    SHIPPABLE = "Shippable"
    EXPIRABLE = "Expirable"


@catalogue.aggregate
class Product:
    """A catalogue product.

    Every product object is its own product: two instances are never the
    same product, even when they share a name or an ``id``. ``quantity`` is
    the live stock level and is decremented by checkout.
    """

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=0)
    weight: Float()
    expiration_date: Date()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be null or empty"]})

    @invariant.post
    def weight_must_be_positive(self):
        if self.weight is not None and self.weight <= 0:
            raise ValidationError({"weight": ["Weight must be greater than zero"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, quantity):
        """A plain product: neither shippable nor expirable."""
        return cls(name=name, price=price, quantity=quantity)

    @classmethod
    def shippable(cls, name, price, quantity, weight):
        if weight is None:
            raise InvalidInputError({"weight": ["Shippable products require a weight"]})
        return cls(name=name, price=price, quantity=quantity, weight=weight)

    @classmethod
    def expirable(cls, name, price, quantity, expiration_date):
        if expiration_date is None:
            raise InvalidInputError({"expiration_date": ["Expirable products require an expiration date"]})
        return cls(name=name, price=price, quantity=quantity, expiration_date=expiration_date)

    @classmethod
    def expirable_shippable(cls, name, price, quantity, expiration_date, weight):
        if weight is None:
            raise InvalidInputError({"weight": ["Shippable products require a weight"]})
        if expiration_date is None:
            raise InvalidInputError({"expiration_date": ["Expirable products require an expiration date"]})
        return cls(
            name=name,
            price=price,
            quantity=quantity,
            expiration_date=expiration_date,
            weight=weight,
        )

    # -------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------
    @property
    def capabilities(self) -> frozenset[Capability]:
        attached = set()
        if self.weight is not None:
            attached.add(Capability.SHIPPABLE)
        if self.expiration_date is not None:
            attached.add(Capability.EXPIRABLE)
        return frozenset(attached)

    @property
    def is_shippable(self) -> bool:
        return Capability.SHIPPABLE in self.capabilities

    @property
    def is_expirable(self) -> bool:
        return Capability.EXPIRABLE in self.capabilities

    def is_expired(self, today: date | None = None) -> bool:
        """True when ``today`` is strictly after the expiration date."""
        if not self.is_expirable:
            return False
        today = today or date.today()
        return today > self.expiration_date

    # -------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------
    # The id is caller-settable, so it cannot tell products apart.
    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)
