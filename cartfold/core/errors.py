"""
Exception types for the cart fold.
"""

from typing import Optional


class CartFoldError(Exception):
    """
    Base error for invalid cart transitions.

    The replay runner annotates errors with the position and type of the
    event that failed via locate().
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.index: Optional[int] = None
        self.event_type: Optional[str] = None

    def locate(self, index: int, event_type: str) -> "CartFoldError":
        self.index = index
        self.event_type = event_type
        return self

    def __str__(self) -> str:
        if self.index is None:
            return self.message
        return f"{self.message} (event #{self.index} {self.event_type})"


class UninitializedAggregateError(CartFoldError):
    """Raised when an event is applied before the cart was opened."""

    def __init__(self, message: str = "Shopping cart not created") -> None:
        super().__init__(message)


class CartAlreadyOpenedError(CartFoldError):
    """Raised when CartOpened is applied to a cart that already exists."""

    def __init__(self, cart_id: str) -> None:
        super().__init__(f"Shopping cart {cart_id} already opened")
        self.cart_id = cart_id


class CartClosedError(CartFoldError):
    """Raised when an event is not allowed in the cart's current status."""

    def __init__(self, cart_id: str, status: str, event_type: str) -> None:
        super().__init__(f"Shopping cart {cart_id} is {status}; {event_type} not allowed")
        self.cart_id = cart_id
        self.status = status
        self.attempted = event_type


class UnknownLineError(CartFoldError):
    """Raised when a removal references a product that is not in the cart."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with id {product_id} not found in the shopping cart")
        self.product_id = product_id


class InsufficientQuantityError(CartFoldError):
    """Raised when a removal asks for more units than the line holds."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Cannot remove {requested} items of product with id {product_id}; "
            f"there are only {available} items"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidLineItemError(CartFoldError):
    """Raised when a line item carries a negative quantity or price."""

    def __init__(self, product_id: str, reason: str) -> None:
        super().__init__(f"Invalid line item for product {product_id}: {reason}")
        self.product_id = product_id


class UnsupportedEventError(CartFoldError):
    """Raised when no handler is registered for an event type."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"Unsupported event type: {event_type}")
        self.unsupported_type = event_type


class DeterminismError(Exception):
    """Raised when repeated replays of one history disagree."""
    pass


class EventDecodeError(Exception):
    """Raised when a serialized event record cannot be decoded."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
