from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.coupon_schemas import CouponVerifyRequest, CouponOut
from app.schemas.response_schemas import ResponseMessage
from app.services.coupon_service import verify_coupon
from app.utils.clock import today_local

router = APIRouter(prefix="/coupons", tags=["Coupons"])


@router.post("/verify", response_model=ResponseMessage[CouponOut])
async def verify_coupon_route(payload: CouponVerifyRequest, db: AsyncSession = Depends(get_db)):
    """Preview a coupon's discount. Does not reserve the code."""
    coupon = await verify_coupon(db, payload.code, today_local())
    return ResponseMessage(message="Coupon is valid", data=coupon)
