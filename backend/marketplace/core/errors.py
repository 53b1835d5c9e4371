"""Domain errors raised by the listing service and the admin gate.

Each error carries the HTTP status it maps to; the handlers registered in
``marketplace.main`` render them as ``{"error": ..., "message": ...}``.
"""

from __future__ import annotations

from typing import Any


class MarketplaceError(Exception):
    status_code: int = 500
    error: str = "InternalError"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ValidationError(MarketplaceError):
    """Missing or invalid listing fields."""

    status_code = 400
    error = "ValidationError"
    default_message = "Invalid request"

    def __init__(self, fields: list[str], message: str | None = None) -> None:
        self.fields = list(fields)
        super().__init__(message or f"Missing or invalid fields: {', '.join(self.fields)}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["fields"] = self.fields
        return payload


class Forbidden(MarketplaceError):
    status_code = 403
    error = "Forbidden"
    default_message = "Admin token missing or invalid"


class NotFound(MarketplaceError):
    status_code = 404
    error = "NotFound"
    default_message = "Product not found"


class StoreUnavailable(MarketplaceError):
    """Database failure. The message never includes driver details."""

    status_code = 500
    error = "StoreUnavailable"
    default_message = "Product store is unavailable"
