"""Checkout receipt: what was bought, what it cost, what is left."""

from dataclasses import dataclass

from fulfillment.shipping.service import ShipmentManifest

_RULE = "-" * 44


@dataclass(frozen=True)
class ReceiptLine:
    product_name: str
    quantity: int
    line_total: float


@dataclass(frozen=True)
class CheckoutReceipt:
    customer_id: str
    lines: tuple[ReceiptLine, ...]
    subtotal: float
    shipping: float
    amount: float
    remaining_balance: float
    manifest: ShipmentManifest

    def render(self) -> str:
        """Plain-text receipt laid out as a two-column table."""
        rows = [
            "------------- Checkout Receipt -------------",
            f"{'Item':<20} {'Total Cost':>10}",
        ]
        rows.extend(f"{f'{line.quantity}x {line.product_name}':<20} {line.line_total:>10.2f}" for line in self.lines)
        rows.append(_RULE)
        rows.append(f"{'Subtotal':<20} {self.subtotal:>10.2f}")
        rows.append(f"{'Shipping':<20} {self.shipping:>10.2f}")
        rows.append(f"{'Amount':<20} {self.amount:>10.2f}")
        rows.append(_RULE)
        return "\n".join(rows)
