from pydantic import BaseModel
from typing import Optional

class CouponVerifyRequest(BaseModel):
    code: Optional[str] = None

class CouponOut(BaseModel):
    id: int
    code: str
    discount_type: str
    discount_value: float
