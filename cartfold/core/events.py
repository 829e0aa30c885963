"""
Event model for shopping cart history.

Events are immutable records of facts that already happened. The set of
variants is closed: EVENT_TYPES lists every type the fold understands.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Type, Union

from .state import LineItem


class _CartEvent:
    """Common behaviour of cart events."""

    cart_id: str

    @property
    def type(self) -> str:
        """Event type (e.g., "CartOpened", "ItemAdded")."""
        return type(self).__name__


@dataclass(frozen=True)
class CartOpened(_CartEvent):
    cart_id: str
    client_id: str


@dataclass(frozen=True)
class ItemAdded(_CartEvent):
    cart_id: str
    item: LineItem


@dataclass(frozen=True)
class ItemRemoved(_CartEvent):
    cart_id: str
    item: LineItem


@dataclass(frozen=True)
class CartConfirmed(_CartEvent):
    cart_id: str
    confirmed_at: datetime


@dataclass(frozen=True)
class CartCanceled(_CartEvent):
    cart_id: str
    canceled_at: datetime


CartEvent = Union[CartOpened, ItemAdded, ItemRemoved, CartConfirmed, CartCanceled]

EVENT_TYPES: Dict[str, Type[_CartEvent]] = {
    cls.__name__: cls
    for cls in (CartOpened, ItemAdded, ItemRemoved, CartConfirmed, CartCanceled)
}


def event_type_name(event: object) -> str:
    """
    Get the type tag of an event, or the class name of a foreign object.
    """
    if isinstance(event, _CartEvent):
        return event.type
    return type(event).__name__
