# app/routers/admin/auth.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import ADMIN_COOKIE_NAME, ADMIN_SESSION_HOURS, COOKIE_SECURE
from app.core.db import get_db
from app.schemas.admin_schemas import AdminLogin, AdminSession
from app.schemas.response_schemas import ResponseMessage
from app.services.admin_auth_service import authenticate_admin, create_admin_session, logout_admin
from app.utils.get_admin import get_current_admin

router = APIRouter(prefix="/auth", tags=["Admin Auth"])


@router.post("/login", response_model=ResponseMessage[AdminSession])
async def login(data: AdminLogin, response: Response, db: AsyncSession = Depends(get_db)):
    admin = await authenticate_admin(db, data.username, data.password)
    token = await create_admin_session(db, admin)

    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="strict",
        max_age=ADMIN_SESSION_HOURS * 60 * 60,
        path="/",
    )
    return ResponseMessage(message="Login successful", data=AdminSession(authenticated=True, username=admin.username))


@router.get("/verify", response_model=ResponseMessage[AdminSession])
async def verify_session(admin=Depends(get_current_admin)):
    return ResponseMessage(message="Session valid", data=AdminSession(authenticated=True, username=admin.username))


@router.post("/logout", response_model=ResponseMessage[AdminSession])
async def logout(response: Response, db: AsyncSession = Depends(get_db), admin=Depends(get_current_admin)):
    """
    Invalidates every session of this admin and clears the cookie.
    """
    await logout_admin(db, admin)
    response.delete_cookie(ADMIN_COOKIE_NAME, path="/")
    return ResponseMessage(message="Logged out successfully", data=AdminSession(authenticated=False))
