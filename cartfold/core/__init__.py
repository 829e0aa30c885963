"""
Core cart fold primitives.

This module provides the foundational abstractions for rebuilding a cart:
- Events: Immutable facts about the cart
- Cart: Projected state with priced line items
- Reducer: Pure dispatch of events to transition handlers
- Canonical: Deterministic serialization and fingerprints
"""

from .events import (
    EVENT_TYPES,
    CartCanceled,
    CartConfirmed,
    CartEvent,
    CartOpened,
    ItemAdded,
    ItemRemoved,
)
from .state import Cart, CartStatus, LineItem
from .reducer import Reducer, apply, cart_reducer
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, cart_fingerprint
from .errors import (
    CartAlreadyOpenedError,
    CartClosedError,
    CartFoldError,
    DeterminismError,
    EventDecodeError,
    InsufficientQuantityError,
    InvalidLineItemError,
    UninitializedAggregateError,
    UnknownLineError,
    UnsupportedEventError,
)

__all__ = [
    "EVENT_TYPES",
    "CartEvent",
    "CartOpened",
    "ItemAdded",
    "ItemRemoved",
    "CartConfirmed",
    "CartCanceled",
    "Cart",
    "CartStatus",
    "LineItem",
    "Reducer",
    "apply",
    "cart_reducer",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "cart_fingerprint",
    "CartFoldError",
    "UninitializedAggregateError",
    "CartAlreadyOpenedError",
    "CartClosedError",
    "UnknownLineError",
    "InsufficientQuantityError",
    "InvalidLineItemError",
    "UnsupportedEventError",
    "DeterminismError",
    "EventDecodeError",
]
