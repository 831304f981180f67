"""
Seed a fresh database with the season's catalog and ordering settings.

Safe to run more than once: rows that already exist (by name, code or key)
are left alone.
"""
import asyncio
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.future import select

from app.core.db import AsyncSessionLocal, init_models
from app.models.catalog_models import Package, Item
from app.models.coupon_models import Coupon, DiscountType
from app.models.setting_models import Setting

PACKAGES = [
    {
        "name": "Mini Box",
        "item_count": 3,
        "price": Decimal("149.00"),
        "highlights": ["Dates", "3 fruits of your choice", "Water bottle"],
        "display_order": 1,
    },
    {
        "name": "Family Box",
        "item_count": 5,
        "price": Decimal("299.00"),
        "highlights": ["Dates", "5 fruits of your choice", "Juice", "Serves 3-4"],
        "display_order": 2,
    },
]

ITEMS = ["Apple", "Banana", "Orange", "Watermelon", "Grapes", "Papaya", "Pomegranate", "Guava"]

SETTINGS = {
    "self_cutoff_time": "18:00",
    "donate_cutoff_time": "15:00",
    "max_boxes_per_day": "500",
}


async def seed():
    await init_models()
    async with AsyncSessionLocal() as session:
        for data in PACKAGES:
            r = await session.execute(select(Package).where(Package.name == data["name"]))
            if not r.scalars().first():
                session.add(Package(**data))

        for name in ITEMS:
            r = await session.execute(select(Item).where(Item.name == name))
            if not r.scalars().first():
                session.add(Item(name=name))

        for key, value in SETTINGS.items():
            r = await session.execute(select(Setting).where(Setting.key == key))
            if not r.scalars().first():
                session.add(Setting(key=key, value=value))

        r = await session.execute(select(Coupon).where(Coupon.code == "RAMADAN10"))
        if not r.scalars().first():
            today = date.today()
            session.add(
                Coupon(
                    code="RAMADAN10",
                    discount_type=DiscountType.PERCENTAGE,
                    discount_value=Decimal("10"),
                    valid_from=today,
                    valid_until=today + timedelta(days=30),
                )
            )

        await session.commit()
        print("Seed data loaded!")


if __name__ == "__main__":
    asyncio.run(seed())
