# app/services/admin_auth_service.py
from datetime import datetime, timezone
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.admin_models import AdminUser
from app.core.security import verify_password, create_session_token


async def authenticate_admin(db: AsyncSession, username: str, password: str) -> AdminUser:
    result = await db.execute(select(AdminUser).where(AdminUser.username == username))
    admin = result.scalars().first()
    if not admin or not admin.is_active or not verify_password(password, admin.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )
    return admin


async def create_admin_session(db: AsyncSession, admin: AdminUser) -> str:
    """
    Issue a signed session token for the cookie.
    Includes token_version so logout invalidates every outstanding session.
    """
    token = create_session_token(
        {"sub": admin.username, "admin_id": admin.id},
        token_version=admin.token_version,
    )

    admin.last_login = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(admin)

    return token


async def logout_admin(db: AsyncSession, admin: AdminUser):
    admin.token_version = (admin.token_version or 0) + 1
    await db.commit()
    return {"msg": "Logged out successfully"}
