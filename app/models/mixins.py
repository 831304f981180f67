# app/models/mixins.py
from sqlalchemy import Column, DateTime, select


class SoftDeleteMixin:
    """Rows are never physically deleted; `deleted_at` hides them from every read."""

    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @classmethod
    def select_live(cls, *entities):
        stmt = select(*entities) if entities else select(cls)
        return stmt.where(cls.deleted_at.is_(None))
