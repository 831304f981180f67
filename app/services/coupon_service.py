# app/services/coupon_service.py
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.coupon_models import DiscountType
from app.schemas.coupon_schemas import CouponOut
from app.services.pricing_service import resolve_coupon
from app.utils.validators import is_missing


async def verify_coupon(db: AsyncSession, code: Optional[str], today: date) -> CouponOut:
    """Read-only preview of a coupon; nothing is reserved or consumed."""
    if is_missing(code):
        raise HTTPException(status_code=400, detail="Coupon code is required")

    coupon = await resolve_coupon(db, code, today)
    if not coupon:
        raise HTTPException(status_code=404, detail="Invalid or expired coupon code")

    return CouponOut(
        id=coupon.id,
        code=coupon.code,
        discount_type=DiscountType(coupon.discount_type).value,
        discount_value=float(coupon.discount_value),
    )
