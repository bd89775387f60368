"""
Schema normalization between backend item records and the client-facing shape.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple


DEFAULT_ITEM_NAME = "Unnamed Item"

# Leading decimal prefix, e.g. "12.50 EUR" -> "12.50"
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Item:
    """Menu item as exposed to the browser client."""

    id: str
    name: str
    description: str
    price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
        }


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def parse_price(value: Any) -> float:
    """Parse a price leniently; unparseable, non-finite or negative prices become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value).strip())
        if not match:
            return 0.0
        price = float(match.group(0))
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def normalize_item(raw: Mapping[str, Any]) -> Item:
    """Map a backend item record onto :class:`Item`.

    Never fails; records without an id come back with ``id == ""`` and are
    dropped by :func:`normalize_items`.
    """
    item_id = _first_present(raw, "itemId", "id")
    name = _first_present(raw, "itemName", "name")
    description = _first_present(raw, "itemDescription", "description")
    return Item(
        id="" if item_id is None else str(item_id),
        name=DEFAULT_ITEM_NAME if name is None else str(name),
        description="" if description is None else str(description),
        price=parse_price(_first_present(raw, "itemPrice", "price")),
    )


def extract_item_records(payload: Any) -> List[Any]:
    """Backend catalogs come either as a bare list or wrapped in ``{"items": [...]}``."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        records = payload.get("items")
        if isinstance(records, list):
            return records
    return []


def normalize_items(payload: Any) -> Tuple[Item, ...]:
    """Normalize a backend catalog payload, dropping records without an id."""
    records: Iterable[Any] = extract_item_records(payload)
    items = (normalize_item(record) for record in records if isinstance(record, Mapping))
    return tuple(item for item in items if item.id)

