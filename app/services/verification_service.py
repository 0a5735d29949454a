"""
Server-side check of a Razorpay checkout signature.

Razorpay signs `order_id|payment_id` with the merchant key secret
(HMAC-SHA256, hex) and hands the result to the client. Only a holder of the
key secret can produce a matching digest, so a match proves the client did
not forge the payment result.
"""
from __future__ import annotations

import hashlib
import hmac
from enum import Enum
from typing import Any, Dict, Optional

from app.logging_config import get_logger
from app.services.payments.errors import ConfigurationError, VerificationRequestError

logger = get_logger(__name__)

VERIFY_FIELDS = ("razorpay_order_id", "razorpay_payment_id", "razorpay_signature")

MISSING_SECRET = "Server configuration error: missing Razorpay secret"


class VerificationResult(str, Enum):
    SUCCESS = "success"
    INVALID_SIGNATURE = "invalid_signature"


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of `order_id|payment_id` keyed by `secret`."""
    message = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
    """Constant-time comparison of the expected digest with `signature`."""
    expected = compute_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


class PaymentVerifier:
    """Stateless verifier bound to the configured key secret."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret

    def __repr__(self):
        return f"<PaymentVerifier(configured={bool(self._secret)})>"

    def verify(self, body: Dict[str, Any]) -> VerificationResult:
        if not isinstance(body, dict) or any(not body.get(field) for field in VERIFY_FIELDS):
            raise VerificationRequestError("Missing required fields")

        order_id, payment_id, signature = (body[field] for field in VERIFY_FIELDS)
        if not all(isinstance(v, str) for v in (order_id, payment_id, signature)):
            raise VerificationRequestError("Payment identifiers and signature must be strings")

        logger.info("payment_verify_requested", order_id=order_id, payment_id=payment_id)

        if not self._secret:
            logger.error("razorpay_secret_missing")
            raise ConfigurationError(MISSING_SECRET)

        if verify_payment_signature(order_id, payment_id, signature, self._secret):
            logger.info("payment_verified", order_id=order_id, payment_id=payment_id)
            return VerificationResult.SUCCESS

        logger.warning("payment_signature_invalid", order_id=order_id, payment_id=payment_id)
        return VerificationResult.INVALID_SIGNATURE
