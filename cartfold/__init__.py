"""
Cart Fold

Event-sourced reconstruction of shopping carts: replay an ordered history of
cart events into a deterministic, immutable cart snapshot.
"""

__version__ = "0.1.0"
