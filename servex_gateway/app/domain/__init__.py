"""
Domain helpers for the Gateway: schema normalization and request validation.
"""

from .normalizer import Item, normalize_item, normalize_items
from .requests import OrderLine, OrderRequest, ReviewRequest, parse_order_request, parse_review_request

__all__ = [
    "Item",
    "normalize_item",
    "normalize_items",
    "OrderLine",
    "OrderRequest",
    "ReviewRequest",
    "parse_order_request",
    "parse_review_request",
]
