"""
Order creation: validates a raw create-order request and forwards it to
Razorpay.

Checks run in a fixed order and the first failure wins:
presence, amount, currency, contact, email, then credentials. Nothing is
sent to Razorpay unless all of them pass.
"""
from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from app.config.settings import Settings
from app.logging_config import get_logger
from app.schemas_pkg.payments import NewOrder
from app.services.payments.base import PaymentAdapter
from app.services.payments.errors import (
    ConfigurationError,
    OrderValidationError,
    RazorpayAPIError,
)

logger = get_logger(__name__)

REQUIRED_FIELDS = ("amount", "currency", "userId", "name")

# ASCII-only \w and \d; matched with fullmatch so a trailing newline fails.
EMAIL_RE = re.compile(r"[\w.-]+@([\w-]+\.)+[\w-]{2,4}", re.ASCII)
CONTACT_RE = re.compile(r"\d{10}", re.ASCII)

RECEIPT_USER_ID_CHARS = 20

MISSING_CREDENTIALS = "Server configuration error: Missing Razorpay credentials"


@dataclass(frozen=True)
class OrderRules:
    min_amount: int = 100
    allowed_currencies: Tuple[str, ...] = ("INR",)
    receipt_prefix: str = "rcpt"
    receipt_max_length: int = 40

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrderRules":
        return cls(
            min_amount=settings.ORDER_MIN_AMOUNT,
            allowed_currencies=tuple(settings.ORDER_ALLOWED_CURRENCIES),
            receipt_prefix=settings.RECEIPT_PREFIX,
            receipt_max_length=settings.RECEIPT_MAX_LENGTH,
        )


def _is_integral(value: Any) -> bool:
    # bool is an int subclass in Python; JSON true is not an amount.
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _optional_str(body: Dict[str, Any], key: str) -> Any:
    value = body.get(key)
    return "" if value is None else value


def validate_order_request(body: Dict[str, Any], rules: OrderRules = OrderRules()) -> NewOrder:
    """
    Validate an untrusted create-order body.

    Returns the normalized NewOrder or raises OrderValidationError with a
    client-facing message.
    """
    if not isinstance(body, dict):
        raise OrderValidationError("Request body must be a JSON object")

    if any(not body.get(field) for field in REQUIRED_FIELDS):
        raise OrderValidationError(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")

    user_id = body["userId"]
    name = body["name"]
    if not isinstance(user_id, str) or not isinstance(name, str):
        raise OrderValidationError("userId and name must be strings")

    amount = body["amount"]
    if not _is_integral(amount) or amount < rules.min_amount:
        raise OrderValidationError(f"Amount must be an integer >= {rules.min_amount}")

    currency = body["currency"]
    if not isinstance(currency, str) or currency not in rules.allowed_currencies:
        if len(rules.allowed_currencies) == 1:
            raise OrderValidationError(f"Currency must be {rules.allowed_currencies[0]}")
        raise OrderValidationError(f"Currency must be one of: {', '.join(rules.allowed_currencies)}")

    contact = _optional_str(body, "contact")
    if not isinstance(contact, str) or (contact and not CONTACT_RE.fullmatch(contact)):
        raise OrderValidationError("Contact must be a valid 10-digit phone number")

    email = _optional_str(body, "email")
    if not isinstance(email, str) or (email and not EMAIL_RE.fullmatch(email)):
        raise OrderValidationError("Invalid email format")

    return NewOrder(
        amount=int(amount),
        currency=currency,
        user_id=user_id,
        name=name,
        email=email,
        contact=contact,
    )


def build_receipt(user_id: str, timestamp_ms: int, rules: OrderRules = OrderRules()) -> str:
    """`<prefix>_<first 20 chars of userId>_<epoch ms>`, cut to the max length."""
    receipt = f"{rules.receipt_prefix}_{user_id[:RECEIPT_USER_ID_CHARS]}_{timestamp_ms}"
    return receipt[:rules.receipt_max_length]


def _now_ms() -> int:
    return int(time.time() * 1000)


class OrderService:
    """Validates create-order requests and places them with Razorpay."""

    def __init__(
        self,
        settings: Settings,
        adapter: Optional[PaymentAdapter],
        clock: Callable[[], int] = _now_ms,
    ):
        self.settings = settings
        self.adapter = adapter
        self.rules = OrderRules.from_settings(settings)
        self.clock = clock

    def _require_adapter(self) -> PaymentAdapter:
        if not self.settings.razorpay_configured or self.adapter is None:
            logger.error(
                "razorpay_credentials_missing",
                key_id_present=bool(self.settings.RAZORPAY_KEY_ID),
                key_secret_present=bool(self.settings.RAZORPAY_KEY_SECRET),
            )
            raise ConfigurationError(MISSING_CREDENTIALS)
        return self.adapter

    async def create_order(self, body: Dict[str, Any]) -> str:
        """Validate `body`, create the Razorpay order and return its id."""
        order = validate_order_request(body, self.rules)
        logger.info(
            "order_create_requested",
            user_id=order.user_id,
            amount=order.amount,
            currency=order.currency,
        )
        adapter = self._require_adapter()

        receipt = build_receipt(order.user_id, self.clock(), self.rules)
        try:
            created = await adapter.create_order(
                amount=order.amount,
                currency=order.currency,
                receipt=receipt,
                notes=order.notes(),
                payment_capture=1,
            )
        except RazorpayAPIError as exc:
            logger.error("razorpay_order_failed", receipt=receipt, **exc.log_fields())
            raise

        order_id = created.get("id") if isinstance(created, dict) else None
        if not order_id:
            logger.error("razorpay_order_invalid_response", receipt=receipt)
            raise RazorpayAPIError("Invalid order response from Razorpay")

        logger.info("order_created", order_id=order_id, receipt=receipt)
        return order_id
