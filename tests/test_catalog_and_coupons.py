"""Storefront reads and the coupon preview endpoint."""

from sqlalchemy import func, select

from app.models.order_models import Order


class TestCatalog:
    async def test_only_active_packages_are_listed(self, client, seed):
        response = await client.get("/api/packages")

        assert response.status_code == 200
        packages = response.json()["data"]["packages"]
        assert [p["name"] for p in packages] == ["Mini Box"]
        assert packages[0]["price"] == 199.0
        assert packages[0]["item_count"] == 3

    async def test_only_available_items_are_listed(self, client, seed):
        response = await client.get("/api/items")

        names = [i["name"] for i in response.json()["data"]["items"]]
        assert names == ["Apple", "Banana", "Grapes", "Orange"]

    async def test_settings_expose_public_keys_only(self, client, seed):
        response = await client.get("/api/settings")

        settings = response.json()["data"]["settings"]
        assert settings == {"donate_cutoff_time": "15:00", "self_cutoff_time": "18:00"}


class TestCouponVerify:
    async def test_valid_coupon(self, client, seed):
        response = await client.post("/api/coupons/verify", json={"code": "pct10"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["code"] == "PCT10"
        assert data["discount_type"] == "percentage"
        assert data["discount_value"] == 10.0

    async def test_expired_coupon(self, client, seed):
        response = await client.post("/api/coupons/verify", json={"code": "OLD5"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Invalid or expired coupon code"

    async def test_blank_code(self, client, seed):
        response = await client.post("/api/coupons/verify", json={"code": "  "})
        assert response.status_code == 400

    async def test_preview_does_not_create_anything(self, client, session_factory, seed):
        await client.post("/api/coupons/verify", json={"code": "PCT10"})
        async with session_factory() as session:
            assert await session.scalar(select(func.count(Order.id))) == 0
