# app/services/order_service.py
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import ORDER_LOOKUP_LIMIT
from app.models.catalog_models import Package, Item
from app.models.order_models import (
    Order,
    OrderItem,
    OrderStatus,
    OrderType,
    InvalidStatusTransition,
)
from app.schemas.order_schemas import (
    OrderCreate,
    OrderCreated,
    OrderSummary,
    OrderDetails,
    AdminOrderOut,
)
from app.services.cutoff_service import check_cutoff_time
from app.services.order_validation import validate_order_request
from app.services.pricing_service import compute_gross, apply_coupon, resolve_coupon
from app.utils.activity_helpers import log_admin_activity
from app.utils.validators import is_missing, is_valid_phone_number, parse_date, sanitize_input

logger = logging.getLogger(__name__)

ORDER_STATUSES = {s.value for s in OrderStatus}


def _status(order: Order) -> str:
    return OrderStatus(order.status).value


def _order_type(order: Order) -> str:
    return OrderType(order.order_type).value


# =====================================================
# 🔹 CREATE ORDER
# =====================================================
async def create_order(db: AsyncSession, payload: OrderCreate, now: datetime) -> OrderCreated:
    """
    Validate, check the same-day cutoff, price and persist an order with its
    item associations. Every write happens in one transaction: any failure rolls
    back the order row and all of its item rows together.
    """
    error = validate_order_request(payload, now.date())
    if error:
        raise HTTPException(status_code=400, detail=error)

    delivery_date = parse_date(payload.delivery_date)

    try:
        # 1️⃣ Same-day cutoff, evaluated against settings read in this request
        cutoff_error = await check_cutoff_time(db, payload.order_type, delivery_date, now)
        if cutoff_error:
            raise HTTPException(status_code=400, detail=cutoff_error)

        # 2️⃣ Package must be active and not deleted
        result = await db.execute(
            Package.select_live().where(Package.id == payload.package_id, Package.is_active == True)
        )
        package = result.scalars().first()
        if not package:
            raise HTTPException(status_code=404, detail="Package not found")

        # 3️⃣ Exact item count for the package
        if len(payload.item_ids) != package.item_count:
            raise HTTPException(
                status_code=400,
                detail=f"You must select exactly {package.item_count} items for this package",
            )

        # 4️⃣ Every item must be available and not deleted
        result = await db.execute(
            Item.select_live(Item.id).where(Item.id.in_(payload.item_ids), Item.is_available == True)
        )
        available_ids = result.scalars().all()
        if len(available_ids) != len(payload.item_ids):
            raise HTTPException(status_code=400, detail="One or more selected items are not available")

        # 5️⃣ Pricing, with the coupon resolved once and frozen onto the order
        gross = compute_gross(package.price, payload.quantity)
        coupon = None
        if not is_missing(payload.coupon_code):
            coupon = await resolve_coupon(db, payload.coupon_code, now.date())
            if coupon is None:
                raise HTTPException(status_code=400, detail="Invalid or expired coupon code")
        pricing = apply_coupon(gross, coupon)

        # 6️⃣ Order header
        order = Order(
            package_id=package.id,
            quantity=payload.quantity,
            order_type=OrderType(payload.order_type),
            delivery_date=delivery_date,
            delivery_location=sanitize_input(payload.delivery_location),
            customer_name=sanitize_input(payload.customer_name),
            phone_number=sanitize_input(payload.phone_number),
            address=sanitize_input(payload.address),
            total_amount=pricing.total_amount,
            discount_amount=pricing.discount_amount,
            coupon_id=pricing.coupon_id,
            sponsor_name=sanitize_input(payload.sponsor_name),
            sponsor_message=sanitize_input(payload.sponsor_message),
            status=OrderStatus.PENDING,
        )
        db.add(order)
        await db.flush()  # ensures order.id is available

        # 7️⃣ One association row per selected item
        for item_id in payload.item_ids:
            db.add(OrderItem(order_id=order.id, item_id=item_id))
        await db.flush()

        # 8️⃣ Commit once: order + items persist atomically
        await db.commit()

    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        logger.exception("Order creation failed; transaction rolled back")
        raise HTTPException(status_code=500, detail="Failed to create order")

    logger.info(
        f"Order {order.id} created: package={package.id} qty={payload.quantity} "
        f"gross={pricing.gross_amount} discount={pricing.discount_amount} total={pricing.total_amount}"
    )

    return OrderCreated(
        order_id=order.id,
        total_amount=float(pricing.total_amount),
        discount_amount=float(pricing.discount_amount),
        status=OrderStatus.PENDING.value,
    )


# =====================================================
# 🔹 LOOKUPS
# =====================================================
async def get_live_order(db: AsyncSession, order_id: int, for_update: bool = False) -> Optional[Order]:
    stmt = Order.select_live().where(Order.id == order_id)
    if for_update:
        stmt = stmt.with_for_update(of=Order)
    result = await db.execute(stmt)
    return result.unique().scalars().first()


async def get_orders_by_phone(db: AsyncSession, phone_number: Optional[str]) -> List[OrderSummary]:
    """
    Most recent orders placed with exactly this phone number. The match is an
    equality on a validated 10-digit number, so no broad query is possible.
    """
    if is_missing(phone_number):
        raise HTTPException(status_code=400, detail="Phone number is required")
    if not is_valid_phone_number(phone_number):
        raise HTTPException(status_code=400, detail="Invalid phone number format")

    result = await db.execute(
        Order.select_live()
        .where(Order.phone_number == phone_number)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(ORDER_LOOKUP_LIMIT)
    )
    orders = result.unique().scalars().all()

    return [
        OrderSummary(
            id=o.id,
            package_id=o.package_id,
            package_name=o.package.name,
            quantity=o.quantity,
            order_type=_order_type(o),
            delivery_date=o.delivery_date,
            delivery_location=o.delivery_location,
            total_amount=float(o.total_amount),
            status=_status(o),
            created_at=o.created_at,
        )
        for o in orders
    ]


async def get_order_details(db: AsyncSession, order_id: int) -> OrderDetails:
    order = await get_live_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    return OrderDetails(
        order_id=order.id,
        customer_name=order.customer_name,
        phone_number=order.phone_number,
        delivery_date=order.delivery_date,
        address=order.address,
        delivery_location=order.delivery_location,
        total_amount=float(order.total_amount),
        discount_amount=float(order.discount_amount),
        quantity=order.quantity,
        order_type=_order_type(order),
        status=_status(order),
        transaction_id=order.transaction_id,
        package_name=order.package.name,
    )


# =====================================================
# 🔹 ADMIN
# =====================================================
def to_admin_out(order: Order) -> AdminOrderOut:
    return AdminOrderOut(
        id=order.id,
        customer_name=order.customer_name,
        phone_number=order.phone_number,
        address=order.address,
        delivery_location=order.delivery_location,
        delivery_date=order.delivery_date,
        total_amount=float(order.total_amount),
        discount_amount=float(order.discount_amount),
        quantity=order.quantity,
        status=_status(order),
        order_type=_order_type(order),
        sponsor_name=order.sponsor_name,
        sponsor_message=order.sponsor_message,
        transaction_id=order.transaction_id,
        created_at=order.created_at,
        package_name=order.package.name if order.package else None,
        package_price=float(order.package.price) if order.package else None,
    )


async def list_orders(db: AsyncSession, status: Optional[str] = None) -> List[AdminOrderOut]:
    stmt = Order.select_live()
    if status:
        if status not in ORDER_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid status")
        stmt = stmt.where(Order.status == OrderStatus(status))

    result = await db.execute(stmt.order_by(Order.created_at.desc(), Order.id.desc()))
    return [to_admin_out(o) for o in result.unique().scalars().all()]


async def update_order_status(db: AsyncSession, order_id: int, new_status: str, admin) -> AdminOrderOut:
    if new_status not in ORDER_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")
    target = OrderStatus(new_status)

    try:
        order = await get_live_order(db, order_id, for_update=True)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")

        current = OrderStatus(order.status)
        if target == current:
            return to_admin_out(order)

        if target == OrderStatus.PAID:
            raise HTTPException(status_code=409, detail="Orders can only be marked paid by payment verification")

        try:
            order.transition_to(target)
        except InvalidStatusTransition as e:
            raise HTTPException(status_code=409, detail=str(e))

        await log_admin_activity(
            db,
            admin_id=admin.id,
            username=admin.username,
            message=f"Changed order #{order.id} status from {current.value} to {target.value}",
        )

        await db.commit()
        await db.refresh(order)

    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        logger.exception(f"Status update for order {order_id} failed; transaction rolled back")
        raise HTTPException(status_code=500, detail="Failed to update order status")

    logger.info(f"Admin {admin.username} moved order {order_id} from {current.value} to {target.value}")
    return to_admin_out(order)
