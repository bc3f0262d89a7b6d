"""
Query parameters shared by item listing and analytics.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Query
from pydantic import AwareDatetime

from ledgerline.models.item import ItemKind


@dataclass
class FilterParams:
    from_: Optional[AwareDatetime]
    to: Optional[AwareDatetime]
    category_id: Optional[uuid.UUID]
    kind: Optional[ItemKind]

    def as_kwargs(self) -> dict:
        return {
            "from_": self.from_,
            "to": self.to,
            "category_id": self.category_id,
            "kind": self.kind,
        }


def filter_params(
    from_: Optional[AwareDatetime] = Query(None, alias="from", description="RFC 3339, inclusive"),
    to: Optional[AwareDatetime] = Query(None, description="RFC 3339, inclusive"),
    category_id: Optional[uuid.UUID] = None,
    kind: Optional[ItemKind] = None,
) -> FilterParams:
    """Parse the time window, category and kind filters."""
    return FilterParams(from_=from_, to=to, category_id=category_id, kind=kind)
