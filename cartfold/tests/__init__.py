"""
Test suite for the cart fold.

Focus areas:
- Transition rules and their failures
- Reducer purity
- Replay determinism
- Canonical serialization
- Event codec and CLI adapters
"""
