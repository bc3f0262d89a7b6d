"""Shared helpers for repositories."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerline.types import has_exact_numeric


def commit(db: Session) -> None:
    """Commit the session, rolling back before re-raising on failure."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def dialect_name(db: Session) -> str:
    return db.get_bind().dialect.name


def exact_numeric(db: Session) -> bool:
    """Whether the bound database aggregates NUMERIC without rounding."""
    return has_exact_numeric(dialect_name(db))
