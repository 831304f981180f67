# app/schemas/order_schemas.py
from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime

# Fields are optional here so that presence, format and business checks all run
# through the order validator and come back as one readable 400 message.
class OrderCreate(BaseModel):
    package_id: Optional[int] = None
    quantity: Optional[int] = None
    order_type: Optional[str] = None
    delivery_date: Optional[str] = None  # YYYY-MM-DD
    delivery_location: Optional[str] = None
    customer_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    item_ids: Optional[List[int]] = None
    sponsor_name: Optional[str] = None
    sponsor_message: Optional[str] = None
    coupon_code: Optional[str] = None

class OrderCreated(BaseModel):
    order_id: int
    total_amount: float
    discount_amount: float
    status: str

class OrderSummary(BaseModel):
    id: int
    package_id: int
    package_name: str
    quantity: int
    order_type: str
    delivery_date: date
    delivery_location: Optional[str] = None
    total_amount: float
    status: str
    created_at: Optional[datetime] = None

class OrderLookupResponse(BaseModel):
    orders: List[OrderSummary]

class OrderDetails(BaseModel):
    order_id: int
    customer_name: str
    phone_number: str
    delivery_date: date
    address: Optional[str] = None
    delivery_location: Optional[str] = None
    total_amount: float
    discount_amount: float
    quantity: int
    order_type: str
    status: str
    transaction_id: Optional[int] = None
    package_name: str

class AdminOrderOut(BaseModel):
    id: int
    customer_name: str
    phone_number: str
    address: Optional[str] = None
    delivery_location: Optional[str] = None
    delivery_date: date
    total_amount: float
    discount_amount: float
    quantity: int
    status: str
    order_type: str
    sponsor_name: Optional[str] = None
    sponsor_message: Optional[str] = None
    transaction_id: Optional[int] = None
    created_at: Optional[datetime] = None
    package_name: Optional[str] = None
    package_price: Optional[float] = None

class OrderStatusUpdate(BaseModel):
    status: str
