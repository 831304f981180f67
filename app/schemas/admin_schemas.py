# app/schemas/admin_schemas.py
from pydantic import BaseModel
from typing import Optional

class AdminLogin(BaseModel):
    username: str
    password: str

class AdminSession(BaseModel):
    authenticated: bool
    username: Optional[str] = None
