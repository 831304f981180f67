# app/utils/get_admin.py
from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.admin_models import AdminUser
from app.core.db import get_db
from app.core.config import ADMIN_COOKIE_NAME
from app.core.security import decode_token


async def get_current_admin(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AdminUser:
    raw_token = request.cookies.get(ADMIN_COOKIE_NAME)
    if not raw_token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        payload = decode_token(raw_token)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    username = payload.get("sub")
    token_version = payload.get("token_version")
    if not username or token_version is None or payload.get("type") != "admin_session":
        raise HTTPException(status_code=401, detail="Invalid session payload")

    result = await db.execute(select(AdminUser).where(AdminUser.username == username))
    admin = result.scalars().first()
    if not admin:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if admin.token_version != token_version:
        raise HTTPException(status_code=401, detail="Session invalidated. Please log in again.")
    if not admin.is_active:
        raise HTTPException(status_code=403, detail="Admin account is inactive.")

    request.state.admin = admin
    return admin
