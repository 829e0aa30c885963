"""
JSON-lines codec for cart events.

Each line is one record: {"type": "<EventType>", ...fields}. Records are
validated with pydantic before they become core events, so the fold only
ever sees well-formed values.

Example:
    {"type": "CartOpened", "cart_id": "1050", "client_id": "3080"}
    {"type": "ItemAdded", "cart_id": "1050", "item": {"product_id": "2050", "quantity": 4, "unit_price": "35.99"}}
    {"type": "CartConfirmed", "cart_id": "1050", "confirmed_at": "2024-05-01T10:00:00+00:00"}
"""

import json
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.canonical import canonicalize
from .core.errors import EventDecodeError, UnsupportedEventError
from .core.events import (
    CartCanceled,
    CartConfirmed,
    CartEvent,
    CartOpened,
    ItemAdded,
    ItemRemoved,
)
from .core.state import LineItem


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    cart_id: str


class LineItemRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    product_id: str
    quantity: int = Field(ge=0)
    unit_price: Decimal = Field(ge=0)

    def to_item(self) -> LineItem:
        return LineItem(product_id=self.product_id, quantity=self.quantity, unit_price=self.unit_price)


class CartOpenedRecord(_Record):
    client_id: str

    def to_event(self) -> CartOpened:
        return CartOpened(cart_id=self.cart_id, client_id=self.client_id)


class ItemAddedRecord(_Record):
    item: LineItemRecord

    def to_event(self) -> ItemAdded:
        return ItemAdded(cart_id=self.cart_id, item=self.item.to_item())


class ItemRemovedRecord(_Record):
    item: LineItemRecord

    def to_event(self) -> ItemRemoved:
        return ItemRemoved(cart_id=self.cart_id, item=self.item.to_item())


class CartConfirmedRecord(_Record):
    confirmed_at: datetime

    def to_event(self) -> CartConfirmed:
        return CartConfirmed(cart_id=self.cart_id, confirmed_at=self.confirmed_at)


class CartCanceledRecord(_Record):
    canceled_at: datetime

    def to_event(self) -> CartCanceled:
        return CartCanceled(cart_id=self.cart_id, canceled_at=self.canceled_at)


RECORD_TYPES: Dict[str, Type[_Record]] = {
    "CartOpened": CartOpenedRecord,
    "ItemAdded": ItemAddedRecord,
    "ItemRemoved": ItemRemovedRecord,
    "CartConfirmed": CartConfirmedRecord,
    "CartCanceled": CartCanceledRecord,
}


def decode_event(record: Dict[str, Any], line: Optional[int] = None) -> CartEvent:
    """
    Decode one record into a core event.

    Args:
        record: Parsed JSON object
        line: Source line number, used in error messages

    Raises:
        UnsupportedEventError: If the record's type is not a cart event
        EventDecodeError: If the record is malformed
    """
    if not isinstance(record, dict):
        raise EventDecodeError("record must be a JSON object", line)
    tag = record.get("type")
    if not tag:
        raise EventDecodeError("record has no type", line)
    if not isinstance(tag, str):
        raise EventDecodeError("record type must be a string", line)
    model = RECORD_TYPES.get(tag)
    if model is None:
        raise UnsupportedEventError(str(tag))
    try:
        parsed = model.model_validate(record)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        raise EventDecodeError(f"invalid {tag}: {where}: {first['msg']}", line) from e
    return parsed.to_event()


def encode_event(event: CartEvent) -> Dict[str, Any]:
    """
    Encode a core event into a JSON-safe record.
    """
    return {"type": event.type, **canonicalize(asdict(event))}


def iter_events(path: str) -> Iterator[CartEvent]:
    """
    Yield events from a JSON-lines file, skipping blank lines.

    Raises:
        FileNotFoundError: If path does not exist
        EventDecodeError: If a line is not valid JSON or not a valid record
    """
    with open(path, "r", encoding="utf-8") as f:
        for lineno, raw in enumerate(f, start=1):
            if not raw.strip():
                continue
            try:
                record = json.loads(raw)
            except json.JSONDecodeError as e:
                raise EventDecodeError(f"invalid JSON: {e.msg}", lineno) from e
            yield decode_event(record, lineno)


def read_events(path: str) -> List[CartEvent]:
    return list(iter_events(path))


def write_events(path: str, events: List[CartEvent]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for ev in events:
            f.write(json.dumps(encode_event(ev), sort_keys=True, separators=(",", ":")))
            f.write("\n")
