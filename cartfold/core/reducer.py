"""
Reducer: Pure cart transition dispatch.

The reducer is the heart of the fold. It must be:
- Pure (no side effects, no I/O)
- Deterministic (same input -> same output)
- Closed (an event type without a handler is an error, never a no-op)
"""

from typing import Callable, Dict, Optional, Type

from .errors import UnsupportedEventError
from .events import event_type_name
from .handlers import register_handlers
from .state import Cart

# Handler signature: (current_cart_or_none, event) -> new_cart
Handler = Callable[[Optional[Cart], object], Cart]


class Reducer:
    """
    Registry of event handlers for cart transitions.

    Handlers are looked up by the exact event class, so subclasses of a
    registered event are not dispatched.

    Usage:
        reducer = Reducer()
        reducer.register(CartOpened, on_cart_opened)
        cart = reducer.apply(None, event)
    """

    def __init__(self) -> None:
        self._handlers: Dict[type, Handler] = {}

    def register(self, event_cls: Type, handler: Handler) -> None:
        """
        Register event handler.

        Args:
            event_cls: Event class
            handler: Pure function (current_cart, event) -> new_cart
        """
        self._handlers[event_cls] = handler

    def handles(self, event_cls: Type) -> bool:
        return event_cls in self._handlers

    def apply(self, state: Optional[Cart], event: object) -> Cart:
        """
        Apply event to cart using registered handler.

        Args:
            state: Current cart, or None before CartOpened
            event: Event to apply

        Returns:
            New cart with event applied

        Raises:
            UnsupportedEventError: If no handler registered for event type
            CartFoldError: If the transition is invalid for the current cart
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise UnsupportedEventError(event_type_name(event))
        return handler(state, event)


def cart_reducer() -> Reducer:
    """
    Build a reducer with every cart handler registered.
    """
    reducer = Reducer()
    register_handlers(reducer)
    return reducer


_DEFAULT = cart_reducer()


def apply(state: Optional[Cart], event: object) -> Cart:
    """Apply one event with the default cart reducer."""
    return _DEFAULT.apply(state, event)
