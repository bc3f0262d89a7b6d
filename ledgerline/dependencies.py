"""
FastAPI dependencies.
"""

from typing import Generator
from sqlalchemy.orm import Session
from ledgerline.database import get_pool


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting a session on the primary database (writes).
    """
    db = get_pool().session()
    try:
        yield db
    finally:
        db.close()


def get_read_db() -> Generator[Session, None, None]:
    """
    Dependency for getting a session on a read replica.
    """
    db = get_pool().session(readonly=True)
    try:
        yield db
    finally:
        db.close()
