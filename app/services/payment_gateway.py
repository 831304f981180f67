# app/services/payment_gateway.py
"""
Razorpay integration.

Two operations are used by the checkout flow:
  1. Backend creates a gateway order (payment intent) for the order total
  2. Browser completes checkout and posts back order id, payment id and an
     HMAC-SHA256 signature, which is verified against the key secret before
     anything is settled
"""

import logging
from typing import Dict, Optional

import httpx

from app.core.config import (
    RAZORPAY_KEY_ID,
    RAZORPAY_KEY_SECRET,
    RAZORPAY_API_BASE,
    PAYMENT_CURRENCY,
    GATEWAY_TIMEOUT_SECONDS,
)
from app.core.security import verify_payment_signature

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    """Gateway unreachable or it refused the request."""


class RazorpayClient:
    def __init__(
        self,
        key_id: str = RAZORPAY_KEY_ID,
        key_secret: str = RAZORPAY_KEY_SECRET,
        api_base: str = RAZORPAY_API_BASE,
        currency: str = PAYMENT_CURRENCY,
        timeout: float = GATEWAY_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id
        self._key_secret = key_secret
        self.api_base = api_base.rstrip("/")
        self.currency = currency
        self.timeout = timeout
        self._transport = transport

    async def create_order(self, amount_minor: int, receipt: str, notes: Optional[Dict[str, str]] = None) -> Dict:
        """Create a gateway order for `amount_minor` (paise). Returns the gateway's JSON body."""
        if not self.key_id or not self._key_secret:
            raise PaymentGatewayError("Payment gateway credentials are not configured")

        payload = {
            "amount": amount_minor,
            "currency": self.currency,
            "receipt": receipt,
            "notes": notes or {},
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                auth=(self.key_id, self._key_secret),
                transport=self._transport,
            ) as client:
                response = await client.post(f"{self.api_base}/orders", json=payload)
        except httpx.RequestError as e:
            logger.error(f"[RAZORPAY] Gateway unreachable for receipt={receipt}: {e}")
            raise PaymentGatewayError("Payment gateway unreachable") from e

        if response.status_code >= 400:
            logger.error(
                f"[RAZORPAY] Order creation rejected | receipt={receipt} | "
                f"status={response.status_code} | body={response.text[:500]}"
            )
            raise PaymentGatewayError(f"Payment gateway rejected the order ({response.status_code})")

        data = response.json()
        if "id" not in data:
            raise PaymentGatewayError("Payment gateway response missing order id")

        logger.info(f"[RAZORPAY] Created gateway order {data['id']} | receipt={receipt} | amount={amount_minor}")
        return data

    def verify_signature(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        return verify_payment_signature(gateway_order_id, payment_id, signature, self._key_secret)


def get_payment_gateway() -> RazorpayClient:
    """FastAPI dependency; overridden in tests."""
    return RazorpayClient()
