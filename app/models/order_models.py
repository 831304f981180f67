# app/models/order_models.py
import enum
from decimal import Decimal
from sqlalchemy import (
    Column, Integer, String, ForeignKey, Numeric, Date, DateTime, Enum, Text
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base
from app.models.mixins import SoftDeleteMixin


class OrderType(str, enum.Enum):
    SELF = "self"
    DONATE = "donate"
    SPONSOR = "sponsor"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    PACKING = "packing"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.PACKING, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.PACKING, OrderStatus.CANCELLED},
    OrderStatus.PACKING: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, current: OrderStatus, target: OrderStatus):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change order status from {current.value} to {target.value}")


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class Order(SoftDeleteMixin, Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    package_id = Column(Integer, ForeignKey("packages.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    order_type = Column(Enum(OrderType, name="order_type", values_callable=_enum_values), nullable=False)

    delivery_date = Column(Date, nullable=False, index=True)
    delivery_location = Column(String(255), nullable=True)  # donate / sponsor target
    address = Column(Text, nullable=True)  # self delivery

    customer_name = Column(String(150), nullable=False)
    phone_number = Column(String(15), nullable=False, index=True)

    total_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    discount_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    coupon_id = Column(Integer, ForeignKey("coupons.id", ondelete="SET NULL"), nullable=True)

    sponsor_name = Column(String(150), nullable=True)
    sponsor_message = Column(Text, nullable=True)

    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    gateway_order_id = Column(String(64), nullable=True, index=True)  # latest payment intent
    transaction_id = Column(
        Integer,
        ForeignKey("transactions.id", use_alter=True, name="fk_orders_transaction_id"),
        nullable=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    # relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", lazy="selectin")
    package = relationship("Package", lazy="joined", innerjoin=True)
    coupon = relationship("Coupon", lazy="selectin")
    payment_intents = relationship("PaymentIntent", back_populates="order", cascade="all, delete-orphan")

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[OrderStatus(self.status)]

    def transition_to(self, target: OrderStatus):
        target = OrderStatus(target)
        current = OrderStatus(self.status)
        if not self.can_transition_to(target):
            raise InvalidStatusTransition(current, target)
        self.status = target

    def mark_paid(self, transaction_id: int):
        if self.transaction_id is not None:
            raise InvalidStatusTransition(OrderStatus(self.status), OrderStatus.PAID)
        self.transition_to(OrderStatus.PAID)
        self.transaction_id = transaction_id


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)

    order = relationship("Order", back_populates="items")
    item = relationship("Item", lazy="selectin")
