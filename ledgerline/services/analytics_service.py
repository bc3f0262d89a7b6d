"""Service for aggregate analytics over items.

Every operation takes the same optional filters (time window, category,
kind) and returns the literal zero of its type when nothing matches.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from ledgerline import aggregates
from ledgerline.errors import wrap_errors
from ledgerline.models import ItemFilter, ItemKind
from ledgerline.repositories import analytics as analytics_repository

DEFAULT_PERCENTILE = 0.9


def sum_amounts(
    db: Session,
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
) -> Decimal:
    with wrap_errors("analytics sum"):
        item_filter = ItemFilter(from_=from_, to=to, category_id=category_id, kind=kind)
        return analytics_repository.sum_amounts(db, item_filter)


def avg_amount(
    db: Session,
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
) -> Decimal:
    with wrap_errors("analytics avg"):
        item_filter = ItemFilter(from_=from_, to=to, category_id=category_id, kind=kind)
        return analytics_repository.avg_amount(db, item_filter)


def count_items(
    db: Session,
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
) -> int:
    with wrap_errors("analytics count"):
        item_filter = ItemFilter(from_=from_, to=to, category_id=category_id, kind=kind)
        return analytics_repository.count_items(db, item_filter)


def median_amount(
    db: Session,
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
) -> Decimal:
    with wrap_errors("analytics median"):
        item_filter = ItemFilter(from_=from_, to=to, category_id=category_id, kind=kind)
        return analytics_repository.median_amount(db, item_filter)


def percentile_amount(
    db: Session,
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
    percentile: float = DEFAULT_PERCENTILE,
) -> Decimal:
    """Continuous percentile; ``percentile`` must be within [0, 1]."""
    with wrap_errors("analytics percentile"):
        p = aggregates.fraction(percentile)
        item_filter = ItemFilter(from_=from_, to=to, category_id=category_id, kind=kind)
        return analytics_repository.percentile_amount(db, item_filter, p)
