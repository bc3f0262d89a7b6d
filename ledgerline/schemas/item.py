"""
Item schemas.
"""

from pydantic import AliasChoices, AwareDatetime, BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
import uuid

from ledgerline.models.item import ItemKind
from ledgerline.schemas.fields import DecimalInput, DecimalString


class ItemBase(BaseModel):
    kind: ItemKind
    title: str = Field(..., min_length=1)
    amount: DecimalInput = Field(..., ge=0, allow_inf_nan=False)
    currency: str = Field(..., pattern=r"^[A-Z]{3}$")
    occurred_at: AwareDatetime
    category_id: Optional[uuid.UUID] = None
    metadata: Optional[Dict[str, Any]] = None


class ItemCreate(ItemBase):
    pass


class ItemUpdate(ItemBase):
    pass


class ItemResponse(BaseModel):
    id: uuid.UUID
    kind: ItemKind
    title: str
    amount: DecimalString
    currency: str
    occurred_at: datetime
    category_id: Optional[uuid.UUID] = None
    # The ORM attribute is item_metadata; "metadata" is taken by SQLAlchemy
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("item_metadata", "metadata"),
    )
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ItemEnvelope(BaseModel):
    item: ItemResponse


class ItemListResponse(BaseModel):
    items: list[ItemResponse]
