"""
Item persistence.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import exists as sql_exists
from sqlalchemy.orm import Session

from ledgerline.errors import ItemNotFoundError
from ledgerline.models import Item, ItemFilter, ItemKind
from ledgerline.repositories.base import commit


def create(db: Session, item: Item) -> Item:
    """Insert an item and return it with its generated id."""
    db.add(item)
    commit(db)
    db.refresh(item)
    return item


def get_by_id(db: Session, item_id: uuid.UUID) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise ItemNotFoundError()
    return item


def list_filtered(db: Session, item_filter: ItemFilter) -> List[Item]:
    """
    One page of items matching the filter. An empty page is a valid result,
    not an error.
    """
    return (
        db.query(Item)
        .filter(item_filter.predicates())
        .order_by(*item_filter.ordering())
        .offset(item_filter.offset)
        .limit(item_filter.limit)
        .all()
    )


def update(
    db: Session,
    item_id: uuid.UUID,
    kind: ItemKind,
    title: str,
    amount: Decimal,
    currency: str,
    occurred_at: datetime,
    category_id: Optional[uuid.UUID],
    metadata: Dict[str, Any],
) -> None:
    updated = db.query(Item).filter(Item.id == item_id).update(
        {
            Item.kind: kind,
            Item.title: title,
            Item.amount: amount,
            Item.currency: currency,
            Item.occurred_at: occurred_at,
            Item.category_id: category_id,
            Item.item_metadata: metadata,
        },
        synchronize_session=False,
    )
    if updated == 0:
        db.rollback()
        raise ItemNotFoundError()
    commit(db)


def delete(db: Session, item_id: uuid.UUID) -> None:
    deleted = db.query(Item).filter(Item.id == item_id).delete(synchronize_session=False)
    if deleted == 0:
        db.rollback()
        raise ItemNotFoundError()
    commit(db)


def exists(db: Session, item_id: uuid.UUID) -> bool:
    return db.query(sql_exists().where(Item.id == item_id)).scalar()
