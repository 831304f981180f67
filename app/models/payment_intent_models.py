from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base


class PaymentIntent(Base):
    """One row per gateway order created for an order. Every intent stays payable."""

    __tablename__ = "payment_intents"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    gateway_order_id = Column(String(64), unique=True, nullable=False, index=True)
    amount_minor = Column(Integer, nullable=False)  # paise
    currency = Column(String(3), nullable=False, default="INR")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    order = relationship("Order", back_populates="payment_intents")
