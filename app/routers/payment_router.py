from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.rate_limiter import get_client_ip
from app.schemas.payment_schemas import (
    PaymentIntentRequest,
    PaymentIntentOut,
    PaymentVerifyRequest,
    PaymentVerifyOut,
)
from app.schemas.response_schemas import ResponseMessage
from app.services import payment_service
from app.services.notification_service import build_order_summary, send_order_confirmation
from app.services.payment_gateway import RazorpayClient, get_payment_gateway

router = APIRouter(prefix="/payment", tags=["Payments"])


@router.post("/create-order", response_model=ResponseMessage[PaymentIntentOut])
async def create_payment_order_route(
    payload: PaymentIntentRequest,
    db: AsyncSession = Depends(get_db),
    gateway: RazorpayClient = Depends(get_payment_gateway),
):
    intent = await payment_service.create_payment_intent(db, payload, gateway)
    return ResponseMessage(message="Payment order created", data=intent)


@router.post("/verify", response_model=ResponseMessage[PaymentVerifyOut])
async def verify_payment_route(
    payload: PaymentVerifyRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    gateway: RazorpayClient = Depends(get_payment_gateway),
):
    """
    Verify the gateway signature, settle the order, then queue the
    confirmation email. Email failures never change the response.
    """
    result = await payment_service.verify_payment(db, payload, gateway, client_ip=get_client_ip(request))

    if not result.already_processed:
        background_tasks.add_task(
            send_order_confirmation,
            build_order_summary(result.order),
            payload.customer_email,
        )

    return ResponseMessage(
        message="Payment already verified" if result.already_processed else "Payment verified successfully",
        data=PaymentVerifyOut(
            order_id=result.order.id,
            transaction_id=result.transaction.id,
            payment_id=result.transaction.payment_gateway_id,
            already_processed=result.already_processed,
        ),
    )
