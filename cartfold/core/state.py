"""
Cart state model.

A cart only exists once CartOpened has been applied; before that the fold
carries None. Cart and LineItem are immutable, transitions build new values.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CartStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELED = "Canceled"


@dataclass(frozen=True)
class LineItem:
    """
    Priced product line.

    Fields:
        product_id: Product identifier, the line's key within a cart
        quantity: Number of units
        unit_price: Price per unit
    """
    product_id: str
    quantity: int
    unit_price: Decimal

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.unit_price

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": format(self.unit_price.normalize(), "f"),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "LineItem":
        return LineItem(
            product_id=str(data["product_id"]),
            quantity=int(data["quantity"]),
            unit_price=Decimal(str(data["unit_price"])),
        )


@dataclass(frozen=True)
class Cart:
    """
    Projected shopping cart.

    Fields:
        id: Cart identifier
        client_id: Owning client
        status: Lifecycle status
        lines: Line items in insertion order, at most one per product_id
        confirmed_at: Set by CartConfirmed
        canceled_at: Set by CartCanceled

    Cart is immutable. Transition handlers use replace() to derive the next cart.
    """
    id: str
    client_id: str
    status: CartStatus = CartStatus.PENDING
    lines: Tuple[LineItem, ...] = field(default_factory=tuple)
    confirmed_at: Optional[datetime] = None
    canceled_at: Optional[datetime] = None

    @staticmethod
    def opened(cart_id: str, client_id: str) -> "Cart":
        return Cart(id=cart_id, client_id=client_id)

    @property
    def is_pending(self) -> bool:
        return self.status is CartStatus.PENDING

    @property
    def total_price(self) -> Decimal:
        return sum((line.total_price for line in self.lines), Decimal("0"))

    def line_for(self, product_id: str) -> Optional[LineItem]:
        """
        Get line by product id.

        Returns:
            Matching line or None if the product is not in the cart
        """
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def with_line(self, line: LineItem) -> "Cart":
        """
        Create new cart with line replaced, appended or dropped.

        A line for an existing product replaces it in place. A line for a new
        product is appended. A line with quantity 0 removes the product.
        """
        lines = []
        found = False
        for existing in self.lines:
            if existing.product_id == line.product_id:
                found = True
                if line.quantity > 0:
                    lines.append(line)
            else:
                lines.append(existing)
        if not found and line.quantity > 0:
            lines.append(line)
        return replace(self, lines=tuple(lines))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "client_id": self.client_id,
            "status": self.status.value,
            "lines": [line.to_dict() for line in self.lines],
            "confirmed_at": self.confirmed_at.isoformat() if self.confirmed_at else None,
            "canceled_at": self.canceled_at.isoformat() if self.canceled_at else None,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Cart":
        confirmed_at = data.get("confirmed_at")
        canceled_at = data.get("canceled_at")
        return Cart(
            id=str(data["id"]),
            client_id=str(data["client_id"]),
            status=CartStatus(data.get("status", CartStatus.PENDING.value)),
            lines=tuple(LineItem.from_dict(x) for x in data.get("lines", [])),
            confirmed_at=datetime.fromisoformat(confirmed_at) if confirmed_at else None,
            canceled_at=datetime.fromisoformat(canceled_at) if canceled_at else None,
        )
