# app/services/pricing_service.py
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.coupon_models import Coupon, DiscountType
from app.utils.decimal_utils import to_decimal


@dataclass(frozen=True)
class PriceBreakdown:
    gross_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    coupon_id: Optional[int] = None


def compute_gross(price, quantity: int) -> Decimal:
    return to_decimal(to_decimal(price) * quantity)


def compute_discount(gross, discount_type, discount_value) -> Decimal:
    """Discount for a coupon, clamped to [0, gross]."""
    gross = to_decimal(gross)
    value = to_decimal(discount_value)

    if DiscountType(discount_type) == DiscountType.PERCENTAGE:
        discount = to_decimal(gross * value / Decimal("100"))
    else:
        discount = value

    if discount < Decimal("0.00"):
        return Decimal("0.00")
    return min(discount, gross)


def apply_coupon(gross, coupon: Optional[Coupon]) -> PriceBreakdown:
    gross = to_decimal(gross)
    if coupon is None:
        return PriceBreakdown(gross_amount=gross, discount_amount=Decimal("0.00"), total_amount=gross)

    discount = compute_discount(gross, coupon.discount_type, coupon.discount_value)
    return PriceBreakdown(
        gross_amount=gross,
        discount_amount=discount,
        total_amount=gross - discount,
        coupon_id=coupon.id,
    )


async def resolve_coupon(db: AsyncSession, code: str, today: date) -> Optional[Coupon]:
    """Active, undeleted coupon whose validity window (inclusive) covers `today`."""
    if not code or not code.strip():
        return None

    stmt = Coupon.select_live().where(
        func.upper(Coupon.code) == code.strip().upper(),
        Coupon.is_active == True,
        Coupon.valid_from <= today,
        Coupon.valid_until >= today,
    )
    result = await db.execute(stmt)
    return result.scalars().first()
