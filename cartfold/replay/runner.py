"""
Replay runner: reconstruct a cart from its event history.

Replay applies the reducer to each event in arrival order, starting from
no cart at all. The order of the input is the causal order; nothing is
reordered or deduplicated.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.errors import CartFoldError, UninitializedAggregateError
from ..core.events import event_type_name
from ..core.reducer import Reducer, cart_reducer
from ..core.state import Cart
from ..logging_config import get_logger


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        cart: Final cart, or None if no CartOpened was replayed
        applied: Number of events applied
    """
    cart: Optional[Cart]
    applied: int


def replay(
    events: Iterable[object],
    reducer: Optional[Reducer] = None,
    to_index: Optional[int] = None,
) -> ReplayResult:
    """
    Replay events to reconstruct a cart.

    Same events always produce the same cart.

    Args:
        events: Ordered events
        reducer: Reducer with registered handlers (default: cart_reducer())
        to_index: Stop after this position (inclusive, None = all)

    Returns:
        ReplayResult with final cart and count

    Raises:
        CartFoldError: First invalid transition, located at its event index
    """
    reducer = reducer or cart_reducer()
    cart: Optional[Cart] = None
    count = 0
    trace_id: Optional[str] = None
    logger = get_logger(__name__)

    for index, ev in enumerate(events):
        if to_index is not None and index > to_index:
            break
        try:
            cart = reducer.apply(cart, ev)
        except CartFoldError as err:
            err.locate(index, event_type_name(ev))
            logger.warning("Replay failed: %s", err)
            raise
        if trace_id is None and cart is not None:
            trace_id = cart.id
            logger = get_logger(__name__, trace_id=trace_id)
        logger.debug("Applied event #%d %s", index, event_type_name(ev))
        count += 1

    logger.info("Replayed %d events", count)
    return ReplayResult(cart=cart, applied=count)


def reconstruct(events: Iterable[object], reducer: Optional[Reducer] = None) -> Cart:
    """
    Reconstruct the current cart from its full history.

    Raises:
        UninitializedAggregateError: If the history never opened the cart
        CartFoldError: First invalid transition, located at its event index
    """
    result = replay(events, reducer)
    if result.cart is None:
        raise UninitializedAggregateError("Shopping cart not created: history has no CartOpened event")
    return result.cart
