# tests/conftest.py
import os

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_secret")
os.environ.pop("SMTP_USER", None)

from datetime import timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from app.core.config import ADMIN_COOKIE_NAME
from app.core.db import Base, get_db
from app.core.rate_limiter import order_create_limiter, order_lookup_limiter
from app.core.security import hash_password, create_session_token, compute_payment_signature
from app.models.admin_models import AdminUser
from app.models.catalog_models import Package, Item
from app.models.coupon_models import Coupon, DiscountType
from app.models.setting_models import Setting
from app.services.payment_gateway import RazorpayClient, get_payment_gateway
from app.utils.clock import today_local

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
GATEWAY_SECRET = "rzp_test_secret"
ADMIN_PASSWORD = "admin-pass-123"


class FakeRazorpayClient(RazorpayClient):
    """Gateway double: creates orders locally, verifies signatures for real."""

    def __init__(self):
        super().__init__(key_id="rzp_test_key", key_secret=GATEWAY_SECRET)
        self.created = []

    async def create_order(self, amount_minor, receipt, notes=None):
        gateway_order = {
            "id": f"order_TEST{len(self.created) + 1}",
            "amount": amount_minor,
            "currency": self.currency,
            "receipt": receipt,
        }
        self.created.append(gateway_order)
        return gateway_order


def sign(gateway_order_id: str, payment_id: str) -> str:
    return compute_payment_signature(gateway_order_id, payment_id, GATEWAY_SECRET)


# --- Test Database Setup ---
@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed(session_factory):
    """Catalog, coupons and cutoff settings shared by the API tests."""
    today = today_local()
    async with session_factory() as session:
        package = Package(
            name="Mini Box",
            item_count=3,
            price=Decimal("199.00"),
            highlights=["Dates", "3 fruits"],
            display_order=1,
        )
        hidden = Package(name="Retired Box", item_count=3, price=Decimal("99.00"), is_active=False)
        items = [Item(name=name) for name in ("Apple", "Banana", "Orange", "Grapes")]
        sold_out = Item(name="Mango", is_available=False)
        coupons = [
            Coupon(
                code="PCT10",
                discount_type=DiscountType.PERCENTAGE,
                discount_value=Decimal("10"),
                valid_from=today - timedelta(days=1),
                valid_until=today + timedelta(days=30),
            ),
            Coupon(
                code="FLAT500",
                discount_type=DiscountType.FIXED,
                discount_value=Decimal("500"),
                valid_from=today - timedelta(days=1),
                valid_until=today + timedelta(days=30),
            ),
            Coupon(
                code="OLD5",
                discount_type=DiscountType.PERCENTAGE,
                discount_value=Decimal("5"),
                valid_from=today - timedelta(days=30),
                valid_until=today - timedelta(days=1),
            ),
        ]
        settings = [
            Setting(key="self_cutoff_time", value="18:00"),
            Setting(key="donate_cutoff_time", value="15:00"),
            Setting(key="internal_note", value="not public"),
        ]
        admin = AdminUser(username="admin", password_hash=hash_password(ADMIN_PASSWORD))

        session.add_all([package, hidden, *items, sold_out, *coupons, *settings, admin])
        await session.commit()

        return {
            "package_id": package.id,
            "hidden_package_id": hidden.id,
            "item_ids": [i.id for i in items],
            "sold_out_item_id": sold_out.id,
            "admin_id": admin.id,
        }


@pytest.fixture
def gateway():
    return FakeRazorpayClient()


@pytest.fixture(autouse=True)
def reset_rate_limiters():
    order_create_limiter.reset()
    order_lookup_limiter.reset()
    yield
    order_create_limiter.reset()
    order_lookup_limiter.reset()


# --- Test Client Fixtures ---
@pytest_asyncio.fixture
async def client(session_factory, gateway):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(seed):
    token = create_session_token({"sub": "admin", "admin_id": seed["admin_id"]}, token_version=0)
    return {"Cookie": f"{ADMIN_COOKIE_NAME}={token}"}


@pytest.fixture
def order_payload(seed):
    return {
        "package_id": seed["package_id"],
        "quantity": 2,
        "order_type": "self",
        "delivery_date": (today_local() + timedelta(days=1)).isoformat(),
        "customer_name": "Ayesha Khan",
        "phone_number": "9876543210",
        "address": "12 MG Road, Bengaluru",
        "item_ids": seed["item_ids"][:3],
    }
