from pydantic import BaseModel
from typing import Any, Dict, Optional


class NewOrder(BaseModel):
    """A create-order request that passed validation."""
    amount: int               # in paise
    currency: str
    user_id: str
    name: str
    email: str = ""
    contact: str = ""

    def notes(self) -> Dict[str, str]:
        return {
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "contact": self.contact,
        }


class CreateOrderOut(BaseModel):
    orderId: str


class VerifyPaymentOut(BaseModel):
    status: str = "success"


class RazorpayErrorOut(BaseModel):
    code: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None
    step: Optional[str] = None
    reason: Optional[str] = None


class ErrorOut(BaseModel):
    error: str
    details: Optional[str] = None
    razorpayError: Optional[RazorpayErrorOut] = None


class RazorpayTestOut(BaseModel):
    status: str = "success"
    message: str = "Razorpay credentials valid"
    orders: Dict[str, Any]


class RootOut(BaseModel):
    message: str


class NotFoundOut(BaseModel):
    error: str = "Route not found"
    path: str


