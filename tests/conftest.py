"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import datetime, timezone
from decimal import Decimal
import uuid

from ledgerline.database import Base
from ledgerline.dependencies import get_db, get_read_db
from ledgerline.main import app
from ledgerline.models import Category, Item, ItemKind


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Reads and writes share the one in-memory database
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_read_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_category(db_session):
    """Factory for categories."""
    def _make(name="Food", description="meals", parent_id=None):
        category = Category(
            id=uuid.uuid4(),
            name=name,
            description=description,
            parent_id=parent_id,
        )
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _make


@pytest.fixture
def sample_category(make_category):
    """Create a sample category."""
    return make_category()


@pytest.fixture
def make_item(db_session):
    """Factory for items; amounts are given as strings."""
    def _make(
        amount="10.00",
        kind=ItemKind.expense,
        occurred_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        category_id=None,
        title="Lunch",
        currency="USD",
        metadata=None,
    ):
        item = Item(
            id=uuid.uuid4(),
            kind=kind,
            title=title,
            amount=Decimal(amount),
            currency=currency,
            occurred_at=occurred_at,
            category_id=category_id,
            item_metadata=metadata or {},
        )
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item
    return _make


@pytest.fixture
def sample_item(make_item, sample_category):
    """Create a sample item in the sample category."""
    return make_item(amount="12.50", category_id=sample_category.id)
