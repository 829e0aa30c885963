"""
Transition handlers for the shopping cart.

All handlers are pure: (current cart or None, event) -> new cart.
They never mutate the cart they receive.
"""

from dataclasses import replace
from typing import Optional

from .events import CartCanceled, CartConfirmed, CartOpened, ItemAdded, ItemRemoved
from .errors import (
    CartAlreadyOpenedError,
    CartClosedError,
    InsufficientQuantityError,
    InvalidLineItemError,
    UninitializedAggregateError,
    UnknownLineError,
)
from .state import Cart, CartStatus, LineItem


def register_handlers(reducer) -> None:
    reducer.register(CartOpened, on_cart_opened)
    reducer.register(ItemAdded, on_item_added)
    reducer.register(ItemRemoved, on_item_removed)
    reducer.register(CartConfirmed, on_cart_confirmed)
    reducer.register(CartCanceled, on_cart_canceled)


def _require_cart(cur: Optional[Cart]) -> Cart:
    if cur is None:
        raise UninitializedAggregateError()
    return cur


def _require_pending(cart: Cart, event_type: str) -> None:
    if not cart.is_pending:
        raise CartClosedError(cart.id, cart.status.value, event_type)


def _check_item(item: LineItem) -> None:
    if item.quantity < 0:
        raise InvalidLineItemError(item.product_id, f"negative quantity {item.quantity}")
    if item.unit_price < 0:
        raise InvalidLineItemError(item.product_id, f"negative unit price {item.unit_price}")


def on_cart_opened(cur: Optional[Cart], ev: CartOpened) -> Cart:
    if cur is not None:
        raise CartAlreadyOpenedError(cur.id)
    return Cart.opened(ev.cart_id, ev.client_id)


def on_item_added(cur: Optional[Cart], ev: ItemAdded) -> Cart:
    cart = _require_cart(cur)
    _require_pending(cart, ev.type)
    _check_item(ev.item)

    existing = cart.line_for(ev.item.product_id)
    if existing is None:
        return cart.with_line(ev.item)

    # Same product merges; the price of the first addition is kept.
    return cart.with_line(existing.with_quantity(existing.quantity + ev.item.quantity))


def on_item_removed(cur: Optional[Cart], ev: ItemRemoved) -> Cart:
    cart = _require_cart(cur)
    _require_pending(cart, ev.type)
    _check_item(ev.item)

    existing = cart.line_for(ev.item.product_id)
    if existing is None:
        raise UnknownLineError(ev.item.product_id)
    if existing.quantity < ev.item.quantity:
        raise InsufficientQuantityError(ev.item.product_id, ev.item.quantity, existing.quantity)

    return cart.with_line(existing.with_quantity(existing.quantity - ev.item.quantity))


def on_cart_confirmed(cur: Optional[Cart], ev: CartConfirmed) -> Cart:
    cart = _require_cart(cur)
    _require_pending(cart, ev.type)
    return replace(cart, status=CartStatus.CONFIRMED, confirmed_at=ev.confirmed_at)


def on_cart_canceled(cur: Optional[Cart], ev: CartCanceled) -> Cart:
    cart = _require_cart(cur)
    # A confirmed cart may still be canceled; a canceled one is final.
    if cart.status is CartStatus.CANCELED:
        raise CartClosedError(cart.id, cart.status.value, ev.type)
    return replace(cart, status=CartStatus.CANCELED, canceled_at=ev.canceled_at)
