from pydantic import BaseModel, EmailStr
from typing import Optional
from decimal import Decimal

class PaymentIntentRequest(BaseModel):
    order_id: int
    amount: Decimal  # major units (rupees)

class PaymentIntentOut(BaseModel):
    razorpay_order_id: str
    amount: int  # minor units (paise)
    currency: str
    key_id: str

class PaymentVerifyRequest(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    order_id: Optional[int] = None
    amount: Optional[Decimal] = None
    customer_email: Optional[EmailStr] = None

class PaymentVerifyOut(BaseModel):
    order_id: int
    transaction_id: int
    payment_id: str
    already_processed: bool = False
