from pydantic import BaseModel
from typing import List, Dict

class PackageOut(BaseModel):
    id: int
    name: str
    item_count: int
    price: float
    highlights: List[str] = []
    display_order: int

    class Config:
        from_attributes = True

class ItemOut(BaseModel):
    id: int
    name: str
    is_available: bool

    class Config:
        from_attributes = True

class PackageListResponse(BaseModel):
    packages: List[PackageOut]

class ItemListResponse(BaseModel):
    items: List[ItemOut]

class SettingsResponse(BaseModel):
    settings: Dict[str, str]
