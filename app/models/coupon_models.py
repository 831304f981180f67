import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from app.core.db import Base
from app.models.mixins import SoftDeleteMixin


class DiscountType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Coupon(SoftDeleteMixin, Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)  # matched case-insensitively
    discount_type = Column(
        Enum(DiscountType, name="discount_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    discount_value = Column(Numeric(10, 2), nullable=False)
    valid_from = Column(Date, nullable=False)
    valid_until = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
