# app/services/order_validation.py
"""
Stateless checks on an incoming order request.

`validate_order_request` returns None when the request is acceptable, or the
first rejection message. Checks short-circuit in a fixed order and never touch
the database.
"""

from datetime import date
from typing import Optional

from app.core.config import MIN_ORDER_QUANTITY, MAX_ORDER_QUANTITY
from app.models.order_models import OrderType
from app.schemas.order_schemas import OrderCreate
from app.utils.validators import (
    is_missing,
    is_valid_phone_number,
    parse_date,
    validate_required_fields,
)

REQUIRED_ORDER_FIELDS = [
    "package_id",
    "quantity",
    "order_type",
    "delivery_date",
    "customer_name",
    "phone_number",
    "item_ids",
]

ORDER_TYPES = {t.value for t in OrderType}


def validate_basic_order_data(order: OrderCreate, today: date) -> Optional[str]:
    if order.order_type not in ORDER_TYPES:
        return "Invalid order type"

    if not is_valid_phone_number(order.phone_number):
        return "Invalid phone number format"

    delivery_date = parse_date(order.delivery_date)
    if delivery_date is None:
        return "Invalid delivery date format"

    if delivery_date < today:
        return "Delivery date cannot be in the past"

    if not (MIN_ORDER_QUANTITY <= order.quantity <= MAX_ORDER_QUANTITY):
        return f"Quantity must be between {MIN_ORDER_QUANTITY} and {MAX_ORDER_QUANTITY}"

    return None


def validate_order_type_requirements(order: OrderCreate) -> Optional[str]:
    if order.order_type == OrderType.SELF.value and is_missing(order.address):
        return "Address is required for self orders"

    if order.order_type in (OrderType.DONATE.value, OrderType.SPONSOR.value) and is_missing(order.delivery_location):
        return "Delivery location is required for donate/sponsor orders"

    return None


def validate_order_request(order: OrderCreate, today: date) -> Optional[str]:
    error = validate_required_fields(order.model_dump(), REQUIRED_ORDER_FIELDS)
    if error:
        return error

    error = validate_basic_order_data(order, today)
    if error:
        return error

    return validate_order_type_requirements(order)
