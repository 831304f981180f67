from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.catalog_schemas import PackageListResponse, ItemListResponse, SettingsResponse
from app.schemas.response_schemas import ResponseMessage
from app.services import catalog_service

router = APIRouter(tags=["Catalog"])


@router.get("/packages", response_model=ResponseMessage[PackageListResponse])
async def list_packages_route(db: AsyncSession = Depends(get_db)):
    packages = await catalog_service.get_active_packages(db)
    return ResponseMessage(message="Packages retrieved", data=PackageListResponse(packages=packages))


@router.get("/items", response_model=ResponseMessage[ItemListResponse])
async def list_items_route(db: AsyncSession = Depends(get_db)):
    items = await catalog_service.get_available_items(db)
    return ResponseMessage(message="Items retrieved", data=ItemListResponse(items=items))


@router.get("/settings", response_model=ResponseMessage[SettingsResponse])
async def get_settings_route(db: AsyncSession = Depends(get_db)):
    settings = await catalog_service.get_public_settings(db)
    return ResponseMessage(message="Settings retrieved", data=SettingsResponse(settings=settings))
