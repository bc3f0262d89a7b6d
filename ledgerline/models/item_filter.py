"""
Selection predicates shared by item listing and analytics.
"""

import operator
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy import and_, bindparam, cast, or_
from sqlalchemy.sql.elements import ColumnElement

from ledgerline.errors import InvalidInputError
from ledgerline.models.item import Item, ItemKind

DEFAULT_LIMIT = 20
MAX_LIMIT = 1000
DEFAULT_SORT = "occurred_at"

SORT_COLUMNS = {
    "occurred_at": Item.occurred_at,
    "created_at": Item.created_at,
    "updated_at": Item.updated_at,
    "title": Item.title,
}


def _guarded(name: str, value: Any, column, compare: Callable) -> ColumnElement:
    """
    ``(:name IS NULL OR column <op> :name)``.

    The parameter is always bound, absent or not, so every filter shape
    compiles to the same statement. The cast gives the driver a type for
    the NULL case.
    """
    param = bindparam(name, value, type_=column.type)
    return or_(cast(param, column.type).is_(None), compare(column, param))


@dataclass(frozen=True)
class ItemFilter:
    """
    Optional predicates on items; an absent field leaves that dimension
    unconstrained. ``limit``, ``offset`` and ``sort_by`` only apply to
    listing.
    """

    from_: Optional[datetime] = None
    to: Optional[datetime] = None
    category_id: Optional[uuid.UUID] = None
    kind: Optional[ItemKind] = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0
    sort_by: str = DEFAULT_SORT

    def __post_init__(self):
        if self.from_ is not None and self.to is not None and self.from_ > self.to:
            raise InvalidInputError("from must not be after to")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise InvalidInputError(f"limit must be between 1 and {MAX_LIMIT}")
        if self.offset < 0:
            raise InvalidInputError("offset must not be negative")
        if self.sort_by not in SORT_COLUMNS:
            allowed = ", ".join(sorted(SORT_COLUMNS))
            raise InvalidInputError(f"invalid sort_by, expected one of: {allowed}")

    def predicates(self) -> ColumnElement:
        """The conjunction of all four predicates, NULL-guarded."""
        return and_(
            _guarded("from_", self.from_, Item.occurred_at, operator.ge),
            _guarded("to", self.to, Item.occurred_at, operator.le),
            _guarded("category_id", self.category_id, Item.category_id, operator.eq),
            _guarded("kind", self.kind, Item.kind, operator.eq),
        )

    def ordering(self):
        """ORDER BY clauses for listing; id breaks ties so pages are stable."""
        return (SORT_COLUMNS[self.sort_by].desc(), Item.id.desc())
