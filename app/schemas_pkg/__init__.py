# app/schemas_pkg/__init__.py

# Payment schemas
from .payments import (
    NewOrder,
    CreateOrderOut,
    VerifyPaymentOut,
    RazorpayErrorOut,
    ErrorOut,
    RazorpayTestOut,
    RootOut,
    NotFoundOut,
)

__all__ = [
    "NewOrder",
    "CreateOrderOut",
    "VerifyPaymentOut",
    "RazorpayErrorOut",
    "ErrorOut",
    "RazorpayTestOut",
    "RootOut",
    "NotFoundOut",
]
