"""
Canonical serialization for deterministic comparison of carts.

Two carts folded from the same history must produce identical bytes here,
so replays can be compared by fingerprint instead of field by field.
"""

import hashlib
import json
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from .state import Cart


def canonicalize(obj: Any) -> Any:
    """
    Convert nested values to canonical JSON-safe form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - Decimal rendered as normalized string ("100.00" -> "100")
    - datetime rendered as ISO 8601
    - Enum rendered as its value
    - objects with to_dict() are expanded
    """
    if hasattr(obj, "to_dict"):
        return canonicalize(obj.to_dict())
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, Decimal):
        return format(obj.normalize(), "f")
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Returns:
        UTF-8 encoded JSON bytes
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    return canonical_json_bytes(obj).decode("utf-8")


def cart_fingerprint(cart: Optional[Cart]) -> str:
    """
    Compute SHA-256 of the cart's canonical JSON.

    Args:
        cart: Cart to hash (None hashes as JSON null)

    Returns:
        Hex string (64 characters)
    """
    return hashlib.sha256(canonical_json_bytes(cart)).hexdigest()
