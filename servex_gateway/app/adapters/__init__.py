"""
Adapters package for the Gateway Service.

Contains the HTTP client wrapper for the restaurant backend. The adapter
encapsulates:

- Backend URLs and request shapes
- Defensive response-body parsing
- Classification of backend and transport failures

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .backend_client import (
    BackendClient,
    BackendFailure,
    BackendResult,
    BackendSuccess,
    EmptyBody,
    JsonBody,
    TextBody,
    parse_body,
    unwrap,
)

__all__ = [
    "BackendClient",
    "BackendFailure",
    "BackendResult",
    "BackendSuccess",
    "EmptyBody",
    "JsonBody",
    "TextBody",
    "parse_body",
    "unwrap",
]
