from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.rate_limiter import rate_limit, order_create_limiter, order_lookup_limiter
from app.schemas.order_schemas import OrderCreate, OrderCreated, OrderLookupResponse, OrderDetails
from app.schemas.response_schemas import ResponseMessage
from app.services import order_service
from app.utils.clock import now_local

router = APIRouter(prefix="/orders", tags=["Orders"])


# POST create order
@router.post(
    "",
    response_model=ResponseMessage[OrderCreated],
    dependencies=[Depends(rate_limit(order_create_limiter))],
)
async def create_order_route(payload: OrderCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a pending order. Cutoff and pricing are evaluated at submission
    time; the client then starts payment for the returned total.
    """
    created = await order_service.create_order(db, payload, now_local())
    return ResponseMessage(message="Order created successfully", data=created)


# GET orders by phone
@router.get(
    "",
    response_model=ResponseMessage[OrderLookupResponse],
    dependencies=[Depends(rate_limit(order_lookup_limiter))],
)
async def get_orders_by_phone_route(
    phone: str | None = Query(None, description="10-digit phone number used on the order"),
    db: AsyncSession = Depends(get_db),
):
    orders = await order_service.get_orders_by_phone(db, phone)
    return ResponseMessage(message="Orders retrieved", data=OrderLookupResponse(orders=orders))


# GET order by ID
@router.get(
    "/{order_id}",
    response_model=ResponseMessage[OrderDetails],
    dependencies=[Depends(rate_limit(order_lookup_limiter))],
)
async def get_order_route(order_id: int, db: AsyncSession = Depends(get_db)):
    order = await order_service.get_order_details(db, order_id)
    return ResponseMessage(message="Order retrieved", data=order)
