# app/models/catalog_models.py
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from app.core.db import Base
from app.models.mixins import SoftDeleteMixin


class Package(SoftDeleteMixin, Base):
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    item_count = Column(Integer, nullable=False)  # items a customer must pick
    price = Column(Numeric(10, 2), nullable=False)
    highlights = Column(JSON, nullable=False, default=list)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Item(SoftDeleteMixin, Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
