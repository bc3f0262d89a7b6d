"""
Item API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ledgerline.api.cancellation import run_cancellable
from ledgerline.api.params import FilterParams, filter_params
from ledgerline.dependencies import get_db, get_read_db
from ledgerline.schemas import (
    CreatedResponse,
    ItemCreate,
    ItemEnvelope,
    ItemListResponse,
    ItemResponse,
    ItemUpdate,
    MessageResponse,
)
from ledgerline.services import item_service

router = APIRouter(prefix="/items", tags=["items"])


@router.post("", response_model=CreatedResponse, status_code=201)
def create_item(
    item: ItemCreate,
    db: Session = Depends(get_db)
):
    """Record a new item. Missing metadata is stored as {}."""
    item_id = item_service.create(
        db,
        kind=item.kind,
        title=item.title,
        amount=item.amount,
        currency=item.currency,
        occurred_at=item.occurred_at,
        category_id=item.category_id,
        metadata=item.metadata,
    )
    return CreatedResponse(id=str(item_id))


@router.get("", response_model=ItemListResponse)
async def list_items(
    request: Request,
    filters: FilterParams = Depends(filter_params),
    limit: int = Query(20),
    offset: int = Query(0),
    sort_by: str = Query("occurred_at"),
    db: Session = Depends(get_read_db)
):
    """List items with filtering and pagination, newest first. Cancelled if the client goes away."""
    items = await run_cancellable(
        request,
        db,
        item_service.list_items,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        **filters.as_kwargs(),
    )
    return ItemListResponse(items=[ItemResponse.model_validate(i) for i in items])


@router.get("/{item_id}", response_model=ItemEnvelope)
def get_item(
    item_id: uuid.UUID,
    db: Session = Depends(get_read_db)
):
    """Get a single item"""
    item = item_service.get_by_id(db, item_id)
    return ItemEnvelope(item=ItemResponse.model_validate(item))


@router.put("/{item_id}", response_model=MessageResponse)
def update_item(
    item_id: uuid.UUID,
    update: ItemUpdate,
    db: Session = Depends(get_db)
):
    """Replace all fields of an item"""
    item_service.update(
        db,
        item_id,
        kind=update.kind,
        title=update.title,
        amount=update.amount,
        currency=update.currency,
        occurred_at=update.occurred_at,
        category_id=update.category_id,
        metadata=update.metadata,
    )
    return MessageResponse(message="item updated")


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: uuid.UUID,
    db: Session = Depends(get_db)
):
    """Delete an item"""
    item_service.delete(db, item_id)
    return MessageResponse(message="item deleted")
