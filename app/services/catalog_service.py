# app/services/catalog_service.py
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog_models import Package, Item
from app.models.setting_models import Setting
from app.schemas.catalog_schemas import PackageOut, ItemOut

PUBLIC_SETTING_KEYS = ("self_cutoff_time", "donate_cutoff_time", "max_boxes_per_day")


async def get_active_packages(db: AsyncSession) -> List[PackageOut]:
    result = await db.execute(
        Package.select_live()
        .where(Package.is_active == True)
        .order_by(Package.display_order.asc(), Package.item_count.asc())
    )
    return [
        PackageOut(
            id=p.id,
            name=p.name,
            item_count=p.item_count,
            price=float(p.price),
            highlights=p.highlights or [],
            display_order=p.display_order,
        )
        for p in result.scalars().all()
    ]


async def get_available_items(db: AsyncSession) -> List[ItemOut]:
    result = await db.execute(
        Item.select_live().where(Item.is_available == True).order_by(Item.name.asc())
    )
    return [ItemOut.model_validate(i, from_attributes=True) for i in result.scalars().all()]


async def get_public_settings(db: AsyncSession) -> Dict[str, str]:
    """Only the settings the storefront needs; everything else stays server side."""
    result = await db.execute(
        select(Setting.key, Setting.value)
        .where(Setting.key.in_(PUBLIC_SETTING_KEYS))
        .order_by(Setting.key.asc())
    )
    return {key: value for key, value in result.all()}
