import asyncio
import os
import sys

from sqlalchemy.future import select

from app.core.db import AsyncSessionLocal, init_models
from app.core.security import hash_password
from app.models.admin_models import AdminUser


async def create_admin(username: str, password: str):
    await init_models()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(AdminUser).where(AdminUser.username == username))
        if result.scalars().first():
            print(f"Admin '{username}' already exists")
            return

        admin = AdminUser(
            username=username,
            password_hash=hash_password(password),
            is_active=True,
        )
        session.add(admin)
        await session.commit()
        print(f"Admin '{username}' created!")


if __name__ == "__main__":
    username = os.getenv("ADMIN_USERNAME", "admin")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        sys.exit("ADMIN_PASSWORD must be set")
    asyncio.run(create_admin(username, password))
