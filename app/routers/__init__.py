# app/routers/__init__.py

from .catalog_router import router as catalog_router
from .coupons_router import router as coupons_router
from .orders_router import router as orders_router
from .payment_router import router as payment_router
from .admin import router as admin_router

__all__ = [
    "catalog_router",
    "coupons_router",
    "orders_router",
    "payment_router",
    "admin_router",
]
