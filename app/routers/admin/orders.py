from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.order_schemas import AdminOrderOut, OrderStatusUpdate
from app.schemas.response_schemas import ResponseMessage
from app.services import order_service
from app.utils.get_admin import get_current_admin

router = APIRouter(prefix="/orders", tags=["Admin Orders"])


@router.get("", response_model=ResponseMessage[List[AdminOrderOut]])
async def list_orders_route(
    status: str | None = Query(None, description="Filter by status (pending/paid/packing/delivered/cancelled)"),
    db: AsyncSession = Depends(get_db),
    _admin=Depends(get_current_admin),
):
    orders = await order_service.list_orders(db, status)
    return ResponseMessage(message="Orders retrieved", data=orders)


@router.patch("/{order_id}/status", response_model=ResponseMessage[AdminOrderOut])
async def update_order_status_route(
    order_id: int,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(get_current_admin),
):
    order = await order_service.update_order_status(db, order_id, payload.status, admin)
    return ResponseMessage(message="Order status updated", data=order)
