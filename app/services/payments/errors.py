"""
Error taxonomy for the payments services.

Each class carries the HTTP status it maps to; the routers turn them into
JSON bodies through exception handlers registered in app.main.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

# Structured fields Razorpay attaches to an API error. Only these are
# forwarded to clients.
RAZORPAY_ERROR_FIELDS = ("code", "description", "source", "step", "reason")


class PaymentError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestBody(PaymentError):
    status_code = 400


class OrderValidationError(PaymentError):
    """Client sent an order request that fails a validation rule."""

    status_code = 400


class VerificationRequestError(PaymentError):
    """Client sent a verification request with missing or malformed fields."""

    status_code = 400


class ConfigurationError(PaymentError):
    """Razorpay credentials are missing from the process configuration.

    `message` is the client-facing text; nothing secret goes in it.
    """

    status_code = 500


class RazorpayAPIError(PaymentError):
    """
    The Razorpay API call failed.

    Covers non-2xx responses, timeouts and transport failures. `status` is the
    upstream HTTP status when there was one.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        error: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.error = {k: error.get(k) for k in RAZORPAY_ERROR_FIELDS} if error else None

    def log_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"message": self.message, "status": self.status}
        fields.update(self.error or {k: None for k in RAZORPAY_ERROR_FIELDS})
        return fields


def scrub_secret(text: str, secret: Optional[str]) -> str:
    """Remove every occurrence of `secret` from text headed to a client."""
    if secret and text:
        return text.replace(secret, "***")
    return text
