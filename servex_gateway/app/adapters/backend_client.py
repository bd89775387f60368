"""
Restaurant backend client for Gateway.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union, TYPE_CHECKING

import httpx

from shared.logging import get_logger
from shared.errors import BackendError, TransportError
from servex_gateway.app.domain.normalizer import Item, normalize_items
from servex_gateway.app.domain.requests import OrderRequest, ReviewRequest

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


@dataclass(frozen=True)
class JsonBody:
    value: Any


@dataclass(frozen=True)
class TextBody:
    text: str


@dataclass(frozen=True)
class EmptyBody:
    pass


ResponseBody = Union[JsonBody, TextBody, EmptyBody]


def parse_body(text: str) -> ResponseBody:
    """Classify a response body; never raises on malformed JSON."""
    if not text:
        return EmptyBody()
    try:
        return JsonBody(json.loads(text))
    except ValueError:
        return TextBody(text)


def body_payload(body: ResponseBody) -> Any:
    """Payload handed to the router: JSON as-is, text wrapped as ``{"message": text}``."""
    if isinstance(body, JsonBody):
        return body.value
    if isinstance(body, TextBody):
        return {"message": body.text}
    return None


def body_message(body: ResponseBody) -> Optional[str]:
    """Human-readable message carried by an error body, if any."""
    if isinstance(body, JsonBody):
        value = body.value
        if isinstance(value, dict):
            message = value.get("message")
            if message:
                return str(message)
        elif isinstance(value, str) and value:
            return value
        return None
    if isinstance(body, TextBody):
        return body.text or None
    return None


@dataclass(frozen=True)
class BackendSuccess:
    status_code: int
    body: ResponseBody

    ok = True

    @property
    def payload(self) -> Any:
        return body_payload(self.body)


@dataclass(frozen=True)
class BackendFailure:
    error: BackendError

    ok = False


BackendResult = Union[BackendSuccess, BackendFailure]


def unwrap(result: BackendResult) -> Any:
    """Return the success payload or raise the carried :class:`BackendError`."""
    if isinstance(result, BackendFailure):
        raise result.error
    return result.payload


@dataclass(frozen=True)
class _Operation:
    name: str
    failure_message: str
    unreachable_message: str


FETCH_ITEMS = _Operation("fetch_items", "Failed to load items", "Unable to load items from backend.")
FETCH_ORDERS = _Operation("fetch_orders", "Unable to load orders from backend.", "Unable to load orders from backend.")
PLACE_ORDER = _Operation("place_order", "Unable to place order.", "Unable to place order right now.")
FETCH_REVIEWS = _Operation("fetch_reviews", "Unable to load reviews from backend.", "Unable to load reviews from backend.")
POST_REVIEW = _Operation("post_review", "Unable to save review.", "Unable to save review right now.")


class BackendClient:
    """Client for the restaurant ordering backend.

    Each operation issues a single request; there is no retry. Failures come
    back as :class:`BackendFailure` values instead of exceptions.
    """

    def __init__(
        self,
        items_url: str,
        orders_url: str,
        reviews_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.items_url = items_url
        self.orders_url = orders_url
        self.reviews_url = reviews_url
        self.timeout = timeout
        self.metrics = metrics
        self._transport = transport
        self.logger = get_logger("gateway.backend_client")

    async def fetch_items(self) -> BackendResult:
        """Fetch the raw item catalog."""
        return await self._request(FETCH_ITEMS, "GET", self.items_url)

    async def fetch_catalog(self) -> Tuple[Item, ...]:
        """Fetch and normalize the item catalog, raising on any failure."""
        result = await self.fetch_items()
        if isinstance(result, BackendSuccess) and isinstance(result.body, TextBody):
            raise BackendError(
                "Backend returned a non-JSON item catalog",
                details={"body": result.body.text[:200]},
            )
        if isinstance(result, BackendSuccess) and isinstance(result.body, EmptyBody):
            raise BackendError("Backend returned an empty item catalog body")
        return normalize_items(unwrap(result))

    async def fetch_orders(self, table_number: Optional[str] = None) -> BackendResult:
        params = {"tableNumber": table_number} if table_number else None
        return await self._request(FETCH_ORDERS, "GET", self.orders_url, params=params)

    async def place_order(self, order: OrderRequest) -> BackendResult:
        return await self._request(PLACE_ORDER, "POST", self.orders_url, json_body=order.to_backend())

    async def fetch_reviews(self, item_id: Optional[str] = None) -> BackendResult:
        params = {"itemId": item_id} if item_id else None
        return await self._request(FETCH_REVIEWS, "GET", self.reviews_url, params=params)

    async def post_review(self, review: ReviewRequest) -> BackendResult:
        return await self._request(POST_REVIEW, "POST", self.reviews_url, json_body=review.to_backend())

    async def _request(
        self,
        operation: _Operation,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> BackendResult:
        """Execute one outbound call and classify the outcome."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as client:
                response = await client.request(method, url, params=params, json=json_body)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            self.logger.error(
                "Backend unreachable",
                operation=operation.name,
                url=url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            self._record(operation, "transport_error")
            return BackendFailure(TransportError(operation.unreachable_message, details={"url": url}))

        body = parse_body(response.text)

        if response.is_success:
            self.logger.debug(
                "Backend request succeeded",
                operation=operation.name,
                url=url,
                status_code=response.status_code,
            )
            self._record(operation, "success")
            return BackendSuccess(status_code=response.status_code, body=body)

        message = body_message(body) or operation.failure_message
        self.logger.warning(
            "Backend request failed",
            operation=operation.name,
            url=url,
            status_code=response.status_code,
            message=message,
        )
        self._record(operation, "backend_error")
        return BackendFailure(
            BackendError(message, status_code=response.status_code, details={"url": url})
        )

    def _record(self, operation: _Operation, outcome: str) -> None:
        if self.metrics:
            self.metrics.increment_counter(
                "backend_requests_total", operation=operation.name, outcome=outcome
            )
