"""
Tests for the event and cart models.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from cartfold.core.events import (
    EVENT_TYPES,
    CartCanceled,
    CartConfirmed,
    CartOpened,
    ItemAdded,
    ItemRemoved,
    event_type_name,
)
from cartfold.core.state import Cart, CartStatus, LineItem


def test_all_event_types_defined():
    """Five distinct event variants make up the closed set."""
    cart_id = "1050"
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    events = [
        CartOpened(cart_id, "3080"),
        ItemAdded(cart_id, LineItem("2050", 4, Decimal("35.99"))),
        ItemRemoved(cart_id, LineItem("2050", 2, Decimal("35.99"))),
        CartConfirmed(cart_id, now),
        CartCanceled(cart_id, now),
    ]

    assert len(events) == 5
    assert len({type(e) for e in events}) == 5
    assert sorted(EVENT_TYPES) == sorted(e.type for e in events)


def test_events_are_immutable():
    ev = CartOpened("c1", "client")

    with pytest.raises(FrozenInstanceError):
        ev.cart_id = "c2"


def test_event_type_name_for_foreign_object():
    assert event_type_name(CartOpened("c1", "client")) == "CartOpened"
    assert event_type_name({"type": "CartOpened"}) == "dict"


def test_line_item_total_price():
    line = LineItem("shoes", 3, Decimal("19.99"))

    assert line.total_price == Decimal("59.97")


def test_cart_with_line_merges_and_drops():
    """with_line replaces in place, appends new products and drops zero lines."""
    cart = Cart.opened("c1", "client")
    cart = cart.with_line(LineItem("a", 1, Decimal("1")))
    cart = cart.with_line(LineItem("b", 2, Decimal("2")))
    cart = cart.with_line(LineItem("a", 5, Decimal("1")))

    assert [(x.product_id, x.quantity) for x in cart.lines] == [("a", 5), ("b", 2)]

    cart = cart.with_line(LineItem("a", 0, Decimal("1")))
    assert [x.product_id for x in cart.lines] == ["b"]
    assert cart.line_for("a") is None


def test_cart_dict_round_trip():
    cart = Cart(
        id="c1",
        client_id="client",
        status=CartStatus.CONFIRMED,
        lines=(LineItem("shoes", 1, Decimal("100")),),
        confirmed_at=datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
    )

    assert Cart.from_dict(cart.to_dict()) == cart
    assert cart.total_price == Decimal("100")
