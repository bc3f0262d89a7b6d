"""
Item database model.
"""

import enum
import uuid
from sqlalchemy import CheckConstraint, Column, Enum, Text, ForeignKey, Index, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from ledgerline.database import Base
from ledgerline.types import ExactDecimal, UTCDateTime, utcnow


class ItemKind(str, enum.Enum):
    """Item kind enumeration."""
    income = "income"
    expense = "expense"
    refund = "refund"
    transfer = "transfer"


class Item(Base):
    """A single recorded financial event."""

    __tablename__ = "items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    kind = Column(Enum(ItemKind, name="item_kind"), nullable=False)
    title = Column(Text, nullable=False)
    amount = Column(ExactDecimal, nullable=False)  # Never a float, see ExactDecimal
    currency = Column(Text, nullable=False)
    occurred_at = Column(UTCDateTime, nullable=False)  # Event time, user supplied
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=True)
    item_metadata = Column(
        "metadata",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Indexes for the filter predicates
    __table_args__ = (
        Index("idx_items_occurred_at", "occurred_at"),
        Index("idx_items_category_id", "category_id"),
        Index("idx_items_kind", "kind"),
        CheckConstraint("amount >= 0", name="ck_items_amount_non_negative"),
    )
