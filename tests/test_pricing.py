"""Gross, discount and total computation, including coupon lookup."""

from datetime import date, timedelta
from decimal import Decimal

from app.models.coupon_models import Coupon, DiscountType
from app.services.pricing_service import (
    apply_coupon,
    compute_discount,
    compute_gross,
    resolve_coupon,
)
from app.utils.decimal_utils import to_minor_units


class TestPricing:
    def test_gross_is_price_times_quantity(self):
        assert compute_gross(Decimal("199.00"), 2) == Decimal("398.00")

    def test_percentage_coupon(self):
        coupon = Coupon(id=1, discount_type=DiscountType.PERCENTAGE, discount_value=Decimal("10"))
        breakdown = apply_coupon(Decimal("398.00"), coupon)

        assert breakdown.discount_amount == Decimal("39.80")
        assert breakdown.total_amount == Decimal("358.20")
        assert breakdown.coupon_id == 1

    def test_fixed_discount_is_clamped_to_gross(self):
        coupon = Coupon(id=2, discount_type=DiscountType.FIXED, discount_value=Decimal("500"))
        breakdown = apply_coupon(Decimal("398.00"), coupon)

        assert breakdown.discount_amount == Decimal("398.00")
        assert breakdown.total_amount == Decimal("0.00")

    def test_no_coupon(self):
        breakdown = apply_coupon(Decimal("149.00"), None)
        assert breakdown.discount_amount == Decimal("0.00")
        assert breakdown.total_amount == Decimal("149.00")
        assert breakdown.coupon_id is None

    def test_percentage_rounds_half_up(self):
        # 12.5% of 0.60 = 0.075
        assert compute_discount(Decimal("0.60"), "percentage", Decimal("12.5")) == Decimal("0.08")

    def test_negative_discount_is_clamped_to_zero(self):
        assert compute_discount(Decimal("100"), "fixed", Decimal("-5")) == Decimal("0.00")

    def test_minor_units(self):
        assert to_minor_units(Decimal("358.20")) == 35820
        assert to_minor_units("0.005") == 1


class TestResolveCoupon:
    async def test_window_is_inclusive_and_case_insensitive(self, db_session):
        today = date(2026, 3, 10)
        db_session.add(
            Coupon(
                code="IFTAR20",
                discount_type=DiscountType.PERCENTAGE,
                discount_value=Decimal("20"),
                valid_from=today,
                valid_until=today + timedelta(days=2),
            )
        )
        await db_session.commit()

        assert await resolve_coupon(db_session, "iftar20", today) is not None
        assert await resolve_coupon(db_session, " IFTAR20 ", today + timedelta(days=2)) is not None
        assert await resolve_coupon(db_session, "IFTAR20", today + timedelta(days=3)) is None
        assert await resolve_coupon(db_session, "IFTAR20", today - timedelta(days=1)) is None

    async def test_inactive_coupon_is_ignored(self, db_session):
        today = date(2026, 3, 10)
        db_session.add(
            Coupon(
                code="PAUSED",
                discount_type=DiscountType.FIXED,
                discount_value=Decimal("50"),
                valid_from=today,
                valid_until=today,
                is_active=False,
            )
        )
        await db_session.commit()

        assert await resolve_coupon(db_session, "PAUSED", today) is None
