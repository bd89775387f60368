"""
API Gateway service for the ServeX restaurant client.
"""

import os
from typing import Any, Dict, Optional

import httpx
from fastapi import Query, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from shared.base_service import BaseService
from shared.config import GatewayConfig, get_config
from shared.errors import BackendError, ValidationError
from shared.metrics import MetricsCollector
from servex_gateway.app.adapters.backend_client import BackendClient, unwrap
from servex_gateway.app.caching.item_cache import Clock, ItemCache
from servex_gateway.app.domain.requests import parse_order_request, parse_review_request


ITEMS_UNAVAILABLE_MESSAGE = "Unable to load items from backend."


class GatewayService(BaseService):
    """API Gateway service implementation."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Clock] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        super().__init__("gateway", config=config, metrics=metrics)
        self.backend_client = BackendClient(
            self.config.items_api_url,
            self.config.ui_orders_url,
            self.config.ui_reviews_url,
            timeout=self.config.backend_timeout_seconds,
            transport=transport,
            metrics=self.metrics,
        )
        self.item_cache = ItemCache(
            self.backend_client.fetch_catalog,
            ttl_ms=self.config.item_cache_ttl_ms,
            clock=clock,
            metrics=self.metrics,
        )

        @self.app.on_event("startup")
        async def _startup():
            self.logger.info(
                "ServeX client app running",
                url=f"http://localhost:{self.config.port}",
                backend=self.config.backend_base_url,
                item_cache_ttl_ms=self.config.item_cache_ttl_ms,
            )

        self._setup_gateway_routes()
        self._setup_static_files()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    async def _read_json(self, request: Request, message: str) -> Any:
        """Parse the request body; unreadable JSON is a client error."""
        try:
            return await request.json()
        except ValueError as exc:
            raise ValidationError(message, details={"body": "invalid JSON"}) from exc

    def _setup_gateway_routes(self):
        """Set up the client-facing API."""

        @self.app.get("/api/items")
        async def list_items():
            """Current item catalog, served from the cache when fresh."""
            try:
                items = await self.item_cache.get_items()
            except Exception as exc:
                # Backend detail stays in the logs
                raise BackendError(ITEMS_UNAVAILABLE_MESSAGE, status_code=502) from exc
            return {"items": [item.to_dict() for item in items]}

        @self.app.get("/api/orders")
        async def list_orders(table_number: Optional[str] = Query(None, alias="tableNumber")):
            result = await self.backend_client.fetch_orders(table_number)
            return {"orders": unwrap(result)}

        @self.app.post("/api/orders")
        async def place_order(request: Request):
            payload = await self._read_json(request, "Table number, customer, and items are required.")
            order = parse_order_request(payload)
            result = await self.backend_client.place_order(order)
            return JSONResponse(status_code=201, content={"order": unwrap(result)})

        @self.app.get("/api/reviews")
        async def list_reviews(item_id: Optional[str] = Query(None, alias="itemId")):
            result = await self.backend_client.fetch_reviews(item_id)
            return {"reviews": unwrap(result)}

        @self.app.post("/api/reviews")
        async def post_review(request: Request):
            payload = await self._read_json(request, "itemId and text are required.")
            review = parse_review_request(payload)
            result = await self.backend_client.post_review(review)
            return JSONResponse(status_code=201, content={"review": unwrap(result)})

    def _setup_static_files(self):
        """Serve the browser client when its build directory is present."""
        static_dir = self.config.static_dir
        if static_dir and os.path.isdir(static_dir):
            self.app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            self.logger.info("Static directory not found, serving API only", static_dir=static_dir)

    async def _check_dependencies(self) -> Dict[str, str]:
        entry = self.item_cache.entry
        return {"item_cache": "warm" if entry.items else "cold"}


def create_app(config: Optional[GatewayConfig] = None, **kwargs):
    """Create FastAPI app instance."""
    service = GatewayService(config or get_config(), **kwargs)
    return service.app


def main():
    """Run the gateway with uvicorn."""
    GatewayService().run()


if __name__ == "__main__":
    main()
