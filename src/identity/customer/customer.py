"""Customer aggregate: contact details, balance and the customer's cart."""

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String, ValueObject
from pydantic import PrivateAttr

from identity.domain import identity
from identity.shared.email import EmailAddress
from identity.shared.phone import PhoneNumber
from ordering.cart.cart import Cart
from shared.exceptions import InsufficientBalanceError, InvalidInputError

logger = structlog.get_logger(__name__)


@identity.aggregate
class Customer:
    """A shopper with a balance to spend and exactly one cart.

    The cart is created empty with the customer and lives as long as the
    customer does; it can be swapped for another cart but never removed.
    """

    name: String(required=True, max_length=100)
    email: ValueObject(EmailAddress, required=True)
    phone: ValueObject(PhoneNumber, required=True)
    balance: Float(required=True, min_value=0.0)

    _cart: Cart = PrivateAttr(default_factory=Cart)

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Customer name cannot be null or empty"]})

    @property
    def cart(self) -> Cart:
        return self._cart

    @cart.setter
    def cart(self, cart: Cart):
        if cart is None:
            raise InvalidInputError({"cart": ["Cart cannot be null"]})
        self._cart = cart

    @classmethod
    def register(cls, name, email, phone, balance):
        """Build a customer from plain contact strings."""
        customer = cls(
            name=name,
            email=EmailAddress(address=email),
            phone=PhoneNumber(number=phone),
            balance=balance,
        )
        logger.info("Customer registered", customer_id=customer.id, name=customer.name)
        return customer

    def debit(self, amount):
        """Take ``amount`` off the balance."""
        if amount < 0:
            raise InvalidInputError({"amount": ["Debit amount cannot be negative"]})
        if amount > self.balance:
            raise InsufficientBalanceError(
                {"balance": [f"Insufficient balance. Total cost: {amount}, Available balance: {self.balance}"]}
            )
        self.balance = self.balance - amount
