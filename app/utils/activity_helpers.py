# app/utils/activity_helpers.py
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.activity_models import AdminActivity

async def log_admin_activity(db: AsyncSession, admin_id: int = None, username: str = None, message: str = "", commit: bool = False):
    """
    Adds an admin activity log to the session. The caller is responsible for the commit.
    """
    activity = AdminActivity(
        admin_id=admin_id,
        username=username,
        message=message
    )
    db.add(activity)
    if commit:
        await db.commit()
