from __future__ import annotations

import base64
from typing import Any, Dict, Optional

import httpx

from app.logging_config import get_logger
from .base import PaymentAdapter
from .errors import ConfigurationError, RazorpayAPIError

logger = get_logger(__name__)

DEFAULT_API_BASE = "https://api.razorpay.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


class RazorpayAdapter(PaymentAdapter):
    def __init__(
        self,
        key_id: Optional[str],
        key_secret: Optional[str],
        base_url: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not key_id or not key_secret:
            raise ConfigurationError("Server configuration error: Missing Razorpay credentials")
        self.key_id = key_id
        token = base64.b64encode(f"{key_id}:{key_secret}".encode()).decode()
        self._auth_header = {"Authorization": f"Basic {token}"}
        self._base = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def __repr__(self):
        return f"<RazorpayAdapter(key_id={self.key_id!r}, base={self._base!r})>"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                r = await client.request(method, f"{self._base}{path}", headers=self._auth_header, **kwargs)
        except httpx.TimeoutException:
            raise RazorpayAPIError(f"Razorpay request timed out after {self._timeout:g}s")
        except httpx.RequestError as exc:
            raise RazorpayAPIError(f"Could not reach Razorpay: {exc.__class__.__name__}")

        logger.info("razorpay_response", method=method, path=path, status_code=r.status_code)
        if r.is_error:
            raise self._api_error(r)
        try:
            return r.json()
        except ValueError:
            raise RazorpayAPIError("Invalid response from Razorpay", status=r.status_code)

    @staticmethod
    def _api_error(r: httpx.Response) -> RazorpayAPIError:
        # Razorpay error bodies look like {"error": {"code": ..., "description": ..., ...}}
        error = None
        try:
            body = r.json()
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                error = body["error"]
        except ValueError:
            pass
        message = (error or {}).get("description") or f"Razorpay API returned HTTP {r.status_code}"
        return RazorpayAPIError(message, status=r.status_code, error=error)

    async def create_order(
        self,
        *,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, str]] = None,
        payment_capture: int = 1,
    ) -> Dict[str, Any]:
        payload = {
            "amount": int(amount),
            "currency": currency.upper(),
            "receipt": receipt,
            "payment_capture": payment_capture,
            "notes": notes or {},
        }
        return await self._request("POST", "/v1/orders", json=payload)

    async def list_orders(self, count: int = 1) -> Dict[str, Any]:
        return await self._request("GET", "/v1/orders", params={"count": count})
