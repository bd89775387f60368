"""
Validation of inbound order and review payloads.

Inbound bodies are loosely typed JSON coming from a browser form, so
numbers may arrive as strings. Coercion follows a few rules:

- numeric strings are accepted (``"5"`` -> 5), blank strings are not a number
- booleans are never numbers
- order lines that fail validation are dropped, not rejected
- an unusable review rating is treated as absent
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from shared.errors import ValidationError


Number = Union[int, float]

ORDER_REQUIRED_MESSAGE = "Table number, customer, and items are required."
ORDER_ITEMS_MESSAGE = "At least one valid item is required."
REVIEW_REQUIRED_MESSAGE = "itemId and text are required."


def to_number(value: Any) -> Optional[Number]:
    """Coerce ``value`` to a finite number, or ``None`` when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _identifier(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return text or None
    return None


@dataclass(frozen=True)
class OrderLine:
    item_id: str
    quantity: Number

    def to_backend(self) -> Dict[str, Any]:
        return {"itemId": self.item_id, "quantity": self.quantity}


@dataclass(frozen=True)
class OrderRequest:
    table_number: int
    customer: Dict[str, Any]
    items: Tuple[OrderLine, ...]

    def to_backend(self) -> Dict[str, Any]:
        """Body in the backend's field naming."""
        return {
            "tableNumber": self.table_number,
            "customer": self.customer,
            "items": [line.to_backend() for line in self.items],
        }


@dataclass(frozen=True)
class ReviewRequest:
    item_id: str
    text: str
    rating: Optional[Number] = field(default=None)

    def to_backend(self) -> Dict[str, Any]:
        return {"itemId": self.item_id, "text": self.text, "rating": self.rating}


def _require_object(payload: Any, message: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError(message)
    return payload


def _parse_order_line(raw: Any) -> Optional[OrderLine]:
    if not isinstance(raw, Mapping):
        return None
    item_id = _identifier(raw.get("itemId"))
    quantity = to_number(raw.get("quantity"))
    if item_id is None or quantity is None or quantity <= 0:
        return None
    return OrderLine(item_id=item_id, quantity=quantity)


def parse_order_request(payload: Any) -> OrderRequest:
    """Build an :class:`OrderRequest` or raise :class:`ValidationError`.

    The top-level shape (table number, customer, items) is checked before
    any order line is looked at.
    """
    body = _require_object(payload, ORDER_REQUIRED_MESSAGE)
    table_number = to_number(body.get("tableNumber"))
    customer = body.get("customer")
    raw_items = body.get("items")

    if (
        table_number is None
        or not isinstance(table_number, int)
        or table_number <= 0
        or not isinstance(customer, Mapping)
        or not isinstance(raw_items, list)
        or not raw_items
    ):
        raise ValidationError(
            ORDER_REQUIRED_MESSAGE,
            details={"tableNumber": body.get("tableNumber")},
        )

    lines: List[OrderLine] = []
    for raw in raw_items:
        line = _parse_order_line(raw)
        if line is not None:
            lines.append(line)

    if not lines:
        raise ValidationError(ORDER_ITEMS_MESSAGE, details={"submitted": len(raw_items)})

    return OrderRequest(table_number=table_number, customer=dict(customer), items=tuple(lines))


def parse_review_request(payload: Any) -> ReviewRequest:
    """Build a :class:`ReviewRequest` or raise :class:`ValidationError`."""
    body = _require_object(payload, REVIEW_REQUIRED_MESSAGE)
    item_id = _identifier(body.get("itemId"))
    text = body.get("text")
    text = str(text).strip() if isinstance(text, (str, int, float)) and not isinstance(text, bool) else ""

    if item_id is None or not text:
        raise ValidationError(REVIEW_REQUIRED_MESSAGE)

    return ReviewRequest(item_id=item_id, text=text, rating=to_number(body.get("rating")))
