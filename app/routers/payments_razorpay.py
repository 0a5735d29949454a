"""
Razorpay payment endpoints: order creation, checkout signature verification
and a credentials check.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.config import Settings
from app.deps import get_order_service, get_payment_adapter, get_payment_verifier, get_settings
from app.logging_config import get_logger
from app.schemas_pkg.payments import CreateOrderOut, ErrorOut, RazorpayTestOut, VerifyPaymentOut
from app.services.order_service import OrderService
from app.services.payments.base import PaymentAdapter
from app.services.payments.errors import (
    InvalidRequestBody,
    PaymentError,
    RazorpayAPIError,
    scrub_secret,
)
from app.services.verification_service import PaymentVerifier, VerificationResult

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Razorpay Payments"])

ERROR_RESPONSES = {400: {"model": ErrorOut}, 500: {"model": ErrorOut}}


async def _read_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise InvalidRequestBody("Invalid JSON body")


def _failure(error: str, exc: Exception, settings: Settings, fallback: str) -> JSONResponse:
    """500 body for an upstream or unexpected failure, with the key secret scrubbed."""
    secret = settings.RAZORPAY_KEY_SECRET
    details = scrub_secret(getattr(exc, "message", None) or str(exc), secret) or fallback
    content: Dict[str, Any] = {"error": error, "details": details}
    if isinstance(exc, RazorpayAPIError) and exc.error:
        content["razorpayError"] = {
            k: scrub_secret(v, secret) if isinstance(v, str) else v
            for k, v in exc.error.items()
        }
    return JSONResponse(status_code=500, content=content)


@router.post("/create-order", response_model=CreateOrderOut, responses=ERROR_RESPONSES)
async def create_order(
    request: Request,
    service: OrderService = Depends(get_order_service),
    settings: Settings = Depends(get_settings),
):
    """Validate the request and create a Razorpay order. Returns only its id."""
    body = await _read_body(request)
    try:
        order_id = await service.create_order(body)
    except RazorpayAPIError as exc:
        return _failure("Failed to create order", exc, settings, "Error creating order")
    except PaymentError:
        raise
    except Exception as exc:
        logger.error("order_create_failed", exc_info=exc)
        return _failure("Failed to create order", exc, settings, "Error creating order")
    return CreateOrderOut(orderId=order_id)


@router.post("/verify-payment", response_model=VerifyPaymentOut, responses=ERROR_RESPONSES)
async def verify_payment(
    request: Request,
    verifier: PaymentVerifier = Depends(get_payment_verifier),
    settings: Settings = Depends(get_settings),
):
    """Check the Razorpay checkout signature for an order/payment pair."""
    body = await _read_body(request)
    try:
        result = verifier.verify(body)
    except PaymentError:
        raise
    except Exception as exc:
        logger.error("payment_verify_failed", exc_info=exc)
        return _failure("Failed to verify payment", exc, settings, "Error verifying payment")

    if result is VerificationResult.SUCCESS:
        return VerifyPaymentOut(status="success")
    return JSONResponse(status_code=400, content={"error": "Invalid signature"})


@router.get("/test-razorpay", response_model=RazorpayTestOut, responses={500: {"model": ErrorOut}})
async def test_razorpay(
    adapter: Optional[PaymentAdapter] = Depends(get_payment_adapter),
    settings: Settings = Depends(get_settings),
):
    """Verify Razorpay credentials by listing 1 order (read-only)."""
    if adapter is None:
        logger.error("razorpay_credentials_missing")
        return JSONResponse(status_code=500, content={"error": "Missing Razorpay credentials"})
    try:
        orders = await adapter.list_orders(count=1)
    except RazorpayAPIError as exc:
        logger.error("razorpay_test_failed", **exc.log_fields())
        return _failure("Failed to test Razorpay credentials", exc, settings, "Razorpay test failed")
    logger.info("razorpay_test_ok", count=orders.get("count") if isinstance(orders, dict) else None)
    return RazorpayTestOut(orders=orders if isinstance(orders, dict) else {"items": orders})
