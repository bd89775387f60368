"""
Shared utilities for the ServeX gateway.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- base_service: FastAPI app wiring shared by services

Do not import from servex_gateway into shared/.
"""
