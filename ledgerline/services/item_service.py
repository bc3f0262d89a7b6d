"""Service for item management."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ledgerline.errors import InvalidInputError, ItemNotFoundError, wrap_errors
from ledgerline.models import Item, ItemFilter, ItemKind
from ledgerline.repositories import categories as category_repository
from ledgerline.repositories import items as item_repository

logger = logging.getLogger(__name__)


def _check_category(db: Session, category_id: Optional[uuid.UUID]) -> None:
    if category_id is not None and not category_repository.exists(db, category_id):
        raise InvalidInputError(f"category {category_id} does not exist")


def _metadata_or_empty(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return metadata if metadata else {}


def create(
    db: Session,
    kind: ItemKind,
    title: str,
    amount: Decimal,
    currency: str,
    occurred_at: datetime,
    category_id: Optional[uuid.UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> uuid.UUID:
    with wrap_errors("create item"):
        _check_category(db, category_id)
        item = item_repository.create(db, Item(
            kind=kind,
            title=title,
            amount=amount,
            currency=currency,
            occurred_at=occurred_at,
            category_id=category_id,
            item_metadata=_metadata_or_empty(metadata),
        ))
        logger.info("created item %s", item.id)
        return item.id


def get_by_id(db: Session, item_id: uuid.UUID) -> Item:
    with wrap_errors("get item"):
        return item_repository.get_by_id(db, item_id)


def list_items(
    db: Session,
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
    limit: int = 20,
    offset: int = 0,
    sort_by: str = "occurred_at",
) -> List[Item]:
    """Items matching the filters, one page at a time."""
    with wrap_errors("list items"):
        item_filter = ItemFilter(
            from_=from_,
            to=to,
            category_id=category_id,
            kind=kind,
            limit=limit,
            offset=offset,
            sort_by=sort_by,
        )
        return item_repository.list_filtered(db, item_filter)


def update(
    db: Session,
    item_id: uuid.UUID,
    kind: ItemKind,
    title: str,
    amount: Decimal,
    currency: str,
    occurred_at: datetime,
    category_id: Optional[uuid.UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    with wrap_errors("update item"):
        if not item_repository.exists(db, item_id):
            raise ItemNotFoundError()
        _check_category(db, category_id)
        item_repository.update(
            db,
            item_id,
            kind=kind,
            title=title,
            amount=amount,
            currency=currency,
            occurred_at=occurred_at,
            category_id=category_id,
            metadata=_metadata_or_empty(metadata),
        )


def delete(db: Session, item_id: uuid.UUID) -> None:
    with wrap_errors("delete item"):
        item_repository.delete(db, item_id)
        logger.info("deleted item %s", item_id)
