# app/services/payment_service.py
import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order_models import OrderStatus
from app.models.payment_intent_models import PaymentIntent
from app.schemas.payment_schemas import PaymentIntentRequest, PaymentIntentOut, PaymentVerifyRequest
from app.services.order_service import get_live_order
from app.services.payment_gateway import RazorpayClient, PaymentGatewayError
from app.services.settlement_service import settle_payment, SettlementResult
from app.utils.decimal_utils import to_decimal, to_minor_units
from app.utils.validators import is_missing

logger = logging.getLogger(__name__)


async def create_payment_intent(
    db: AsyncSession, payload: PaymentIntentRequest, gateway: RazorpayClient
) -> PaymentIntentOut:
    order = await get_live_order(db, payload.order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    if OrderStatus(order.status) != OrderStatus.PENDING:
        raise HTTPException(status_code=409, detail="Order is not awaiting payment")

    total = to_decimal(order.total_amount)
    if to_decimal(payload.amount) != total:
        raise HTTPException(status_code=400, detail="Amount does not match order total")

    amount_minor = to_minor_units(total)
    if amount_minor <= 0:
        raise HTTPException(status_code=400, detail="Order total must be greater than zero to take a payment")

    # no transaction stays open across the gateway call
    await db.commit()

    try:
        gateway_order = await gateway.create_order(
            amount_minor,
            receipt=f"order_{order.id}",
            notes={"order_id": str(order.id)},
        )
    except PaymentGatewayError:
        raise HTTPException(status_code=500, detail="Failed to create payment order")

    # earlier intents stay payable at the gateway
    db.add(
        PaymentIntent(
            order_id=order.id,
            gateway_order_id=gateway_order["id"],
            amount_minor=amount_minor,
            currency=gateway_order.get("currency", gateway.currency),
        )
    )
    order.gateway_order_id = gateway_order["id"]
    await db.commit()
    logger.info(f"Payment intent {gateway_order['id']} created for order {order.id} ({amount_minor} paise)")

    return PaymentIntentOut(
        razorpay_order_id=gateway_order["id"],
        amount=gateway_order.get("amount", amount_minor),
        currency=gateway_order.get("currency", gateway.currency),
        key_id=gateway.key_id,
    )


async def verify_payment(
    db: AsyncSession,
    payload: PaymentVerifyRequest,
    gateway: RazorpayClient,
    client_ip: Optional[str] = None,
) -> SettlementResult:
    """
    The signature check is the only proof that the gateway captured the
    payment; nothing in the callback body is trusted until it passes.
    """
    required = (
        payload.razorpay_order_id,
        payload.razorpay_payment_id,
        payload.razorpay_signature,
        payload.order_id,
    )
    if any(is_missing(value) for value in required):
        raise HTTPException(status_code=400, detail="Missing required payment details")

    if not gateway.verify_signature(
        payload.razorpay_order_id, payload.razorpay_payment_id, payload.razorpay_signature
    ):
        logger.warning(
            f"SECURITY: invalid payment signature | order={payload.order_id} "
            f"gateway_order={payload.razorpay_order_id} payment={payload.razorpay_payment_id} ip={client_ip}"
        )
        raise HTTPException(status_code=400, detail="Invalid payment signature")

    return await settle_payment(
        db,
        order_id=payload.order_id,
        gateway_order_id=payload.razorpay_order_id,
        payment_id=payload.razorpay_payment_id,
        callback_amount=payload.amount,
    )
