"""
Tests for replay determinism.

Critical: Replay must produce identical carts across multiple runs.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest import mock

import pytest

from cartfold.core import (
    CartCanceled,
    CartConfirmed,
    CartOpened,
    CartStatus,
    DeterminismError,
    InsufficientQuantityError,
    ItemAdded,
    ItemRemoved,
    LineItem,
    UninitializedAggregateError,
    UnknownLineError,
    cart_fingerprint,
)
from cartfold.replay import reconstruct, replay, verify_determinism

CART = "cart-X"
CLIENT = "client-Y"
T1 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
T2 = datetime(2024, 5, 1, 11, 0, tzinfo=timezone.utc)


def _scenario():
    return [
        CartOpened(CART, CLIENT),
        ItemAdded(CART, LineItem("shoes", 2, Decimal("100"))),
        ItemAdded(CART, LineItem("tshirt", 1, Decimal("50"))),
        ItemRemoved(CART, LineItem("shoes", 1, Decimal("100"))),
        CartConfirmed(CART, T1),
        CartCanceled(CART, T2),
    ]


def test_reconstruct_scenario():
    """Full history yields the expected cart."""
    cart = reconstruct(_scenario())

    assert cart.id == CART
    assert cart.client_id == CLIENT
    assert len(cart.lines) == 2

    assert cart.lines[0].product_id == "shoes"
    assert cart.lines[0].quantity == 1
    assert cart.lines[0].unit_price == Decimal("100")

    assert cart.lines[1].product_id == "tshirt"
    assert cart.lines[1].quantity == 1
    assert cart.lines[1].unit_price == Decimal("50")

    assert cart.status is CartStatus.CANCELED
    assert cart.confirmed_at == T1
    assert cart.canceled_at == T2


def test_replay_determinism_100_runs():
    """Replay same events 100 times must produce identical cart."""
    events = _scenario()

    results = {cart_fingerprint(replay(events).cart) for _ in range(100)}

    assert len(results) == 1


def test_replay_counts_applied():
    result = replay(_scenario())

    assert result.applied == 6


def test_replay_partial():
    """Replay to a specific index must stop there (inclusive)."""
    result = replay(_scenario(), to_index=2)

    assert result.applied == 3
    assert result.cart.status is CartStatus.PENDING
    assert result.cart.line_for("shoes").quantity == 2


def test_replay_accepts_iterator():
    result = replay(iter(_scenario()))

    assert result.applied == 6


def test_replay_empty_history():
    """Replay of no events yields no cart."""
    result = replay([])

    assert result.applied == 0
    assert result.cart is None


def test_reconstruct_without_open_fails():
    with pytest.raises(UninitializedAggregateError):
        reconstruct([])


def test_error_identifies_failing_event():
    events = _scenario()[:2] + [ItemRemoved(CART, LineItem("hat", 1, Decimal("10")))]

    with pytest.raises(UnknownLineError) as exc:
        reconstruct(events)

    assert exc.value.index == 2
    assert exc.value.event_type == "ItemRemoved"
    assert "event #2 ItemRemoved" in str(exc.value)


def test_insufficient_quantity_fails_fast():
    events = _scenario()[:2] + [
        ItemRemoved(CART, LineItem("shoes", 5, Decimal("100"))),
        CartConfirmed(CART, T1),
    ]

    with pytest.raises(InsufficientQuantityError) as exc:
        replay(events)

    assert exc.value.index == 2


def test_event_before_open_located():
    with pytest.raises(UninitializedAggregateError) as exc:
        reconstruct([ItemAdded(CART, LineItem("shoes", 1, Decimal("1")))])

    assert exc.value.index == 0


def test_replay_failure_logged(caplog):
    events = [CartOpened(CART, CLIENT), CartOpened(CART, CLIENT)]

    with caplog.at_level("WARNING", logger="cartfold.replay.runner"):
        with pytest.raises(Exception):
            replay(events)

    assert any("Replay failed" in r.getMessage() for r in caplog.records)


def test_verify_determinism_returns_fingerprint():
    events = _scenario()

    fingerprint = verify_determinism(events, runs=10)

    assert fingerprint == cart_fingerprint(reconstruct(events))
    assert len(fingerprint) == 64


def test_verify_determinism_detects_divergence():
    """A reducer whose output varies between runs is caught."""
    events = _scenario()
    carts = [reconstruct(events), reconstruct(events[:3])]

    with mock.patch("cartfold.replay.verify.replay") as fake:
        fake.side_effect = [mock.Mock(cart=c) for c in carts]
        with pytest.raises(DeterminismError):
            verify_determinism(events, runs=2)


def test_verify_determinism_rejects_zero_runs():
    with pytest.raises(ValueError):
        verify_determinism(_scenario(), runs=0)
