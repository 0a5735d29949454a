from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class PaymentAdapter(Protocol):
    async def create_order(
        self,
        *,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, str]] = None,
        payment_capture: int = 1,
    ) -> Dict[str, Any]:
        """
        Create a PSP order. Returns the raw order entity, at least { id }.
        Raises RazorpayAPIError when the provider rejects or cannot be reached.
        """
        ...

    async def list_orders(self, count: int = 1) -> Dict[str, Any]:
        """
        List recent orders. Used to check that credentials are accepted.
        """
        ...
