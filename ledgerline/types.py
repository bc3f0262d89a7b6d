"""
Column types that keep amounts and timestamps exact across database backends.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.types import TypeDecorator

# Dialects whose numeric type does exact decimal arithmetic in SQL.
EXACT_NUMERIC_DIALECTS = frozenset({"postgresql"})


def has_exact_numeric(dialect_name: str) -> bool:
    return dialect_name in EXACT_NUMERIC_DIALECTS


class ExactDecimal(TypeDecorator):
    """
    Arbitrary-precision decimal.

    Stored as unconstrained NUMERIC where the backend supports it, otherwise
    as the canonical decimal string so nothing is ever rounded through a
    binary float (SQLite would store NUMERIC as REAL).
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if has_exact_numeric(dialect.name):
            return dialect.type_descriptor(Numeric(asdecimal=True))
        return dialect.type_descriptor(String())

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        if has_exact_numeric(dialect.name):
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(value)


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp, always bound and returned in UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            # SQLite stores the wall clock only
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
