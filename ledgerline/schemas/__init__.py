"""
Pydantic schemas package.
"""

from pydantic import BaseModel

from ledgerline.schemas.analytics import (
    SumResponse,
    AvgResponse,
    CountResponse,
    MedianResponse,
    PercentileResponse,
)
from ledgerline.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryEnvelope,
    CategoryList,
)
from ledgerline.schemas.item import (
    ItemBase,
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemEnvelope,
    ItemListResponse,
)


class CreatedResponse(BaseModel):
    id: str


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "SumResponse",
    "AvgResponse",
    "CountResponse",
    "MedianResponse",
    "PercentileResponse",
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryEnvelope",
    "CategoryList",
    "ItemBase",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemEnvelope",
    "ItemListResponse",
    "CreatedResponse",
    "MessageResponse",
]
