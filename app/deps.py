from typing import Optional
from fastapi import Depends, Request
from .config import Settings
from .services.order_service import OrderService
from .services.payments.base import PaymentAdapter
from .services.payments.razorpay_adapter import RazorpayAdapter
from .services.verification_service import PaymentVerifier


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with (see app.main.create_app)."""
    return request.app.state.settings


def get_payment_adapter(settings: Settings = Depends(get_settings)) -> Optional[PaymentAdapter]:
    """
    Razorpay client for this request, or None when credentials are missing.
    Missing credentials are reported by the services, after input validation.
    """
    if not settings.razorpay_configured:
        return None
    return RazorpayAdapter(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_API_BASE,
        timeout=settings.RAZORPAY_TIMEOUT_SECONDS,
    )


def get_order_service(
    settings: Settings = Depends(get_settings),
    adapter: Optional[PaymentAdapter] = Depends(get_payment_adapter),
) -> OrderService:
    return OrderService(settings, adapter)


def get_payment_verifier(settings: Settings = Depends(get_settings)) -> PaymentVerifier:
    return PaymentVerifier(settings.RAZORPAY_KEY_SECRET)
