"""
API Gateway Service package for the ServeX restaurant client.

The gateway fronts browser requests, providing:
- A normalized item catalog, cached for a configurable TTL
- Validation and reshaping of orders and reviews before forwarding
- Translation of backend and transport failures into HTTP errors

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: HTTP client for the restaurant backend.
- app.caching: Item catalog cache.
- app.domain: Schema normalization and request validation.
"""
