"""
Determinism verification: replay one history several times and compare.
"""

from typing import Optional, Sequence

from ..core.canonical import cart_fingerprint
from ..core.errors import DeterminismError
from ..core.reducer import Reducer
from .runner import replay


def verify_determinism(
    events: Sequence[object], runs: int = 2, reducer: Optional[Reducer] = None
) -> str:
    """
    Replay events `runs` times and check every run yields the same cart.

    Args:
        events: Ordered events (must be re-iterable)
        runs: Number of replays (at least 1)
        reducer: Reducer to use (default: cart_reducer())

    Returns:
        Fingerprint shared by all runs

    Raises:
        ValueError: If runs < 1
        DeterminismError: If fingerprints differ between runs
    """
    if runs < 1:
        raise ValueError("runs must be >= 1")

    fingerprints = set()
    for _ in range(runs):
        result = replay(events, reducer)
        fingerprints.add(cart_fingerprint(result.cart))

    if len(fingerprints) != 1:
        raise DeterminismError(f"Replay produced {len(fingerprints)} distinct carts over {runs} runs")
    return fingerprints.pop()
