"""
Stateless order request checks: required fields, formats, quantity bounds
and the per-type delivery requirements.
"""

from datetime import date

import pytest

from app.schemas.order_schemas import OrderCreate
from app.services.order_validation import validate_order_request
from app.utils.validators import is_valid_phone_number, parse_date, sanitize_input

TODAY = date(2026, 3, 10)


def make_order(**overrides):
    data = {
        "package_id": 1,
        "quantity": 1,
        "order_type": "self",
        "delivery_date": "2026-03-11",
        "customer_name": "Ayesha",
        "phone_number": "9876543210",
        "address": "12 MG Road",
        "item_ids": [1, 2, 3],
    }
    data.update(overrides)
    return OrderCreate(**data)


class TestValidateOrderRequest:
    def test_valid_self_order_passes(self):
        assert validate_order_request(make_order(), TODAY) is None

    def test_valid_donate_order_passes(self):
        order = make_order(order_type="donate", address=None, delivery_location="Masjid-e-Noor")
        assert validate_order_request(order, TODAY) is None

    @pytest.mark.parametrize("field", ["package_id", "quantity", "order_type", "customer_name", "phone_number"])
    def test_missing_required_field(self, field):
        order = make_order(**{field: None})
        assert validate_order_request(order, TODAY) == f"Missing required field: {field}"

    def test_blank_string_counts_as_missing(self):
        assert validate_order_request(make_order(customer_name="   "), TODAY) == "Missing required field: customer_name"

    def test_first_missing_field_is_reported(self):
        order = make_order(package_id=None, phone_number=None)
        assert validate_order_request(order, TODAY) == "Missing required field: package_id"

    def test_unknown_order_type(self):
        assert validate_order_request(make_order(order_type="gift"), TODAY) == "Invalid order type"

    @pytest.mark.parametrize("phone", ["5876543210", "98765", "98765432101", "98765abcde"])
    def test_bad_phone_number(self, phone):
        assert validate_order_request(make_order(phone_number=phone), TODAY) == "Invalid phone number format"

    @pytest.mark.parametrize("value", ["11-03-2026", "2026-02-30", "tomorrow"])
    def test_bad_delivery_date(self, value):
        assert validate_order_request(make_order(delivery_date=value), TODAY) == "Invalid delivery date format"

    def test_past_delivery_date(self):
        assert validate_order_request(make_order(delivery_date="2026-03-09"), TODAY) == "Delivery date cannot be in the past"

    def test_today_is_allowed(self):
        assert validate_order_request(make_order(delivery_date="2026-03-10"), TODAY) is None

    @pytest.mark.parametrize("quantity", [0, 101, -3])
    def test_quantity_out_of_range(self, quantity):
        assert validate_order_request(make_order(quantity=quantity), TODAY) == "Quantity must be between 1 and 100"

    @pytest.mark.parametrize("quantity", [1, 100])
    def test_quantity_bounds_are_inclusive(self, quantity):
        assert validate_order_request(make_order(quantity=quantity), TODAY) is None

    def test_self_order_requires_address(self):
        assert validate_order_request(make_order(address=""), TODAY) == "Address is required for self orders"

    @pytest.mark.parametrize("order_type", ["donate", "sponsor"])
    def test_donation_requires_location(self, order_type):
        order = make_order(order_type=order_type, delivery_location=None)
        assert validate_order_request(order, TODAY) == "Delivery location is required for donate/sponsor orders"


class TestValidatorHelpers:
    def test_phone_pattern(self):
        assert is_valid_phone_number("6000000000")
        assert not is_valid_phone_number(None)

    def test_parse_date(self):
        assert parse_date("2026-03-11") == date(2026, 3, 11)
        assert parse_date(None) is None

    def test_sanitize_input_strips_quotes_and_semicolons(self):
        assert sanitize_input("  Robert'); DROP \"x\" ") == "Robert) DROP x"
        assert sanitize_input(None) is None
