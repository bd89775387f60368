"""
Shared error handling for the ServeX gateway.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned to the browser client."""

    error: str


class GatewayException(Exception):
    """Base exception for gateway errors that map onto an HTTP response."""

    status_code = 500

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=self.message)


class ValidationError(GatewayException):
    """Malformed inbound request; never forwarded upstream."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class BackendError(GatewayException):
    """The backend answered with a non-success status or an unusable body."""

    status_code = 502

    def __init__(
        self,
        message: str = "Backend error",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("BACKEND_ERROR", message, details, status_code=status_code)


class TransportError(BackendError):
    """The outbound call itself failed (DNS, connection refused, ...)."""

    def __init__(self, message: str = "Unable to reach backend.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=502, details=details)
        self.code = "TRANSPORT_ERROR"
