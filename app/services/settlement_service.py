# app/services/settlement_service.py
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order_models import Order, OrderStatus
from app.models.payment_intent_models import PaymentIntent
from app.models.transaction_models import Transaction
from app.services.order_service import get_live_order
from app.utils.decimal_utils import to_decimal, to_minor_units

logger = logging.getLogger(__name__)


@dataclass
class SettlementResult:
    order: Order
    transaction: Transaction
    already_processed: bool = False


async def settle_payment(
    db: AsyncSession,
    gateway_order_id: str,
    payment_id: str,
    order_id: Optional[int] = None,
    callback_amount: Optional[Decimal] = None,
) -> SettlementResult:
    """
    Record a verified payment: insert the transaction and flip the order to
    paid in one unit of work. Callers must have checked the gateway signature.

    The order is the one the gateway order was created for. A caller-supplied
    `order_id` that names any other order is rejected.

    A replayed callback for the same payment returns the existing transaction
    instead of writing a second one.
    """
    try:
        r = await db.execute(select(PaymentIntent).where(PaymentIntent.gateway_order_id == gateway_order_id))
        intent = r.scalars().first()
        if intent is None:
            logger.warning(f"SECURITY: payment {payment_id} names unknown gateway order {gateway_order_id}")
            raise HTTPException(status_code=400, detail="Invalid payment")

        if order_id is not None and order_id != intent.order_id:
            logger.warning(
                f"SECURITY: payment {payment_id} for gateway order {gateway_order_id} "
                f"belongs to order {intent.order_id}, not {order_id}"
            )
            raise HTTPException(status_code=400, detail="Invalid payment")
        order_id = intent.order_id

        # lock order row
        order = await get_live_order(db, order_id, for_update=True)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")

        if order.transaction_id is not None:
            existing = await db.get(Transaction, order.transaction_id)
            if existing and existing.payment_gateway_id == payment_id:
                logger.info(f"Payment {payment_id} for order {order_id} already settled, skipping")
                return SettlementResult(order=order, transaction=existing, already_processed=True)
            logger.warning(f"Order {order_id} already settled by another payment; rejecting {payment_id}")
            raise HTTPException(status_code=409, detail="Order has already been paid")

        if OrderStatus(order.status) != OrderStatus.PENDING:
            raise HTTPException(
                status_code=409,
                detail=f"Order cannot be paid while {OrderStatus(order.status).value}",
            )

        r = await db.execute(select(Transaction).where(Transaction.payment_gateway_id == payment_id))
        if r.scalars().first():
            logger.warning(f"SECURITY: payment {payment_id} already used for a different order")
            raise HTTPException(status_code=409, detail="Payment has already been recorded")

        amount = to_decimal(order.total_amount)
        if intent.amount_minor != to_minor_units(amount):
            logger.warning(
                f"SECURITY: gateway order {gateway_order_id} was for {intent.amount_minor} paise, "
                f"order {order_id} total is {amount}"
            )
            raise HTTPException(status_code=400, detail="Invalid payment")
        if callback_amount is not None and to_decimal(callback_amount) != amount:
            # the stored total is authoritative; the callback body is not trusted
            logger.warning(
                f"Callback amount {callback_amount} differs from order {order_id} total {amount}"
            )

        transaction = Transaction(
            order_id=order.id,
            payment_gateway_id=payment_id,
            gateway_order_id=gateway_order_id,
            amount=amount,
            status="success",
            paid_at=datetime.now(timezone.utc),
        )
        db.add(transaction)
        await db.flush()  # ensures transaction.id is available

        order.mark_paid(transaction.id)
        await db.flush()

        await db.commit()

    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        logger.exception(f"Settlement for order {order_id} failed; transaction rolled back")
        raise HTTPException(status_code=500, detail="Failed to verify payment")

    logger.info(f"Order {order_id} paid: transaction={transaction.id} payment={payment_id} amount={amount}")
    return SettlementResult(order=order, transaction=transaction)
