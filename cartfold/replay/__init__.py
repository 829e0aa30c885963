"""
Replay system for cart reconstruction.

Replay applies the reducer to an event history to rebuild the cart.
Must be 100% deterministic: same events -> same cart.
"""

from .runner import ReplayResult, reconstruct, replay
from .verify import verify_determinism

__all__ = [
    "ReplayResult",
    "reconstruct",
    "replay",
    "verify_determinism",
]
