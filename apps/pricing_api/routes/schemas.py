from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


# ===== Pydantic models =====
class CatalogItem(BaseModel):
    category_name: str
    name: str
    description: str = ""
    external_code: str
    price: float
    stock: float = 0
    image_url: str = ""
    thumbnail_url: str = ""
    status: str = "UNKNOWN"
    price_ifood: float
    price_99food: float
    price_keeta: float


class CatalogResponse(BaseModel):
    items: List[CatalogItem] = Field(default_factory=list)
    km_band: str
    keeta_fee: float


class CategoryGroup(BaseModel):
    name: str
    items: List[CatalogItem] = Field(default_factory=list)


class GroupedCatalogResponse(BaseModel):
    km_band: str
    keeta_fee: float
    categories: List[CategoryGroup] = Field(default_factory=list)
