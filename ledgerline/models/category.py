"""
Category database model.
"""

import uuid
from sqlalchemy import Column, Text, ForeignKey, Uuid
from ledgerline.database import Base
from ledgerline.types import UTCDateTime, utcnow


class Category(Base):
    """Category model with hierarchical support."""

    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    parent_id = Column(Uuid, ForeignKey("categories.id"), nullable=True, index=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)
