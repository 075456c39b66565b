"""Checkout: validate the customer's cart, price it, and settle it.

Flow:
    1. Customer must be present
    2. Cart must not be empty
    3. Every line is checked against live stock and expiry; shippable
       lines are collected for shipping in the same pass
    4. Items cost + shipping cost must fit the customer's balance
    5. Settlement: decrement stock, debit the balance, ship, clear the cart

Steps 1-4 only read. Nothing is mutated until every check has passed, so a
rejected checkout leaves the customer, the cart and the inventory exactly
as they were.

Stock is checked again here even though the cart checked it when each item
was added: stock may have changed since, and the reservation is not a hold.
"""

from datetime import date

import structlog

from fulfillment.shipping.service import FLAT_RATE_PER_KG, ShippingService
from ordering.checkout.receipt import CheckoutReceipt, ReceiptLine
from shared.exceptions import (
    EmptyCartError,
    ExpiredProductError,
    InsufficientBalanceError,
    InsufficientStockError,
    InvalidInputError,
    OutOfStockError,
)

logger = structlog.get_logger(__name__)


class CheckoutService:
    def __init__(self, rate_per_kg: float = FLAT_RATE_PER_KG, clock=date.today):
        self.rate_per_kg = rate_per_kg
        self._clock = clock

    def checkout(self, customer) -> CheckoutReceipt:
        """Run the checkout for ``customer``.

        Raises exactly one ``ShopStreamError`` subclass on the first failed
        check; returns the receipt on success.
        """
        if customer is None:
            raise InvalidInputError({"customer": ["Customer cannot be null"]})

        cart = customer.cart
        if cart.is_empty():
            logger.warning("Checkout rejected: empty cart", customer_id=customer.id)
            raise EmptyCartError({"cart": ["Cart is empty. Please add items to the cart before checkout"]})

        shipping_service = ShippingService(self._validate_items(cart), rate_per_kg=self.rate_per_kg)

        shipping_cost = shipping_service.calculate_shipping_cost()
        items_cost = cart.items_total_cost
        total_cost = items_cost + shipping_cost

        if total_cost > customer.balance:
            logger.warning(
                "Checkout rejected: insufficient balance",
                customer_id=customer.id,
                total_cost=total_cost,
                balance=customer.balance,
            )
            raise InsufficientBalanceError(
                {
                    "balance": [
                        f"Insufficient balance. Total cost: {total_cost}, Available balance: {customer.balance}"
                    ]
                }
            )

        return self._settle(customer, shipping_service, items_cost, shipping_cost, total_cost)

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    def _validate_items(self, cart):
        """Check every line; return the shippable ones as product -> quantity."""
        today = self._clock()
        shippable_items = {}
        for item in cart.items:
            product = item.product
            if product.quantity == 0:
                logger.warning("Checkout rejected: out of stock", product=product.name)
                raise OutOfStockError({"product": [f"Product is out of stock: {product.name}"]})
            if product.quantity < item.quantity:
                logger.warning(
                    "Checkout rejected: insufficient stock",
                    product=product.name,
                    available=product.quantity,
                    requested=item.quantity,
                )
                raise InsufficientStockError({"product": [f"Insufficient stock for product: {product.name}"]})
            if product.is_expirable and product.is_expired(today):
                logger.warning("Checkout rejected: expired product", product=product.name)
                raise ExpiredProductError({"product": [f"Product is expired: {product.name}"]})

            if product.is_shippable:
                shippable_items[product] = item.quantity
        return shippable_items

    # -------------------------------------------------------------------
    # Settlement
    # -------------------------------------------------------------------
    def _settle(self, customer, shipping_service, items_cost, shipping_cost, total_cost):
        cart = customer.cart
        manifest = shipping_service.manifest()
        logger.info(
            "Shipment notice",
            items=[f"{i.quantity}x {i.product.name}" for i in manifest.items],
            total_weight=manifest.total_weight,
        )

        lines = tuple(
            ReceiptLine(product_name=item.product.name, quantity=item.quantity, line_total=item.line_total)
            for item in cart.items
        )

        # Work out every new stock level before writing any of them
        new_levels = [(item.product, item.product.quantity - item.quantity) for item in cart.items]
        for product, level in new_levels:
            product.quantity = level

        logger.info(
            "Checkout summary",
            subtotal=items_cost,
            shipping=shipping_cost,
            amount=total_cost,
        )

        customer.debit(total_cost)
        shipping_service.ship_items()
        cart.clear()

        logger.info(
            "Checkout successful",
            customer_id=customer.id,
            remaining_balance=customer.balance,
        )

        return CheckoutReceipt(
            customer_id=customer.id,
            lines=lines,
            subtotal=items_cost,
            shipping=shipping_cost,
            amount=total_cost,
            remaining_balance=customer.balance,
            manifest=manifest,
        )
