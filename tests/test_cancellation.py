"""Tests for cancelling queries of abandoned requests."""

import time
from types import SimpleNamespace

import anyio
import pytest
from sqlalchemy import text

from ledgerline.api.cancellation import run_cancellable
from ledgerline.errors import RequestCancelledError, RequestTimeoutError

# Counts to a billion; only ever finishes early by being interrupted
ENDLESS_QUERY = text(
    "WITH RECURSIVE counter(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM counter) "
    "SELECT count(*) FROM (SELECT x FROM counter LIMIT 1000000000)"
)


class FakeRequest:
    """Request whose client disconnects ``disconnect_after`` seconds after creation."""

    def __init__(self, disconnect_after=None):
        self.method = "GET"
        self.url = SimpleNamespace(path="/api/analytics/sum")
        self.disconnect_at = None if disconnect_after is None else time.monotonic() + disconnect_after

    async def is_disconnected(self):
        return self.disconnect_at is not None and time.monotonic() >= self.disconnect_at


def endless(db):
    return db.execute(ENDLESS_QUERY).scalar()


def select_one(db):
    return db.execute(text("SELECT 1")).scalar()


def run(request, db, func, **kwargs):
    async def main():
        return await run_cancellable(request, db, func, **kwargs)
    return anyio.run(main)


class TestRunCancellable:

    def test_returns_result(self, db_session):
        assert run(FakeRequest(), db_session, select_one) == 1

    def test_passes_arguments(self, db_session):
        def add(db, a, b=0):
            return a + b
        assert run(FakeRequest(), db_session, add, a=2, b=3) == 5

    def test_disconnect_cancels_query(self, db_session):
        started = time.monotonic()
        with pytest.raises(RequestCancelledError):
            run(FakeRequest(disconnect_after=0.2), db_session, endless, timeout=60)
        assert time.monotonic() - started < 30

    def test_deadline_cancels_query(self, db_session):
        with pytest.raises(RequestTimeoutError):
            run(FakeRequest(), db_session, endless, timeout=0.2)

    def test_session_usable_after_cancel(self, db_session):
        with pytest.raises(RequestCancelledError):
            run(FakeRequest(disconnect_after=0.1), db_session, endless, timeout=60)
        db_session.rollback()
        assert run(FakeRequest(), db_session, select_one) == 1

    def test_errors_of_connected_clients_propagate(self, db_session):
        def fail(db):
            raise ValueError("bad filter")
        with pytest.raises(ValueError):
            run(FakeRequest(), db_session, fail)


def test_timed_out_request_returns_503(client, monkeypatch):
    from ledgerline.config import settings
    from ledgerline.services import analytics_service

    monkeypatch.setattr(analytics_service, "sum_amounts", lambda db, **filters: endless(db))
    monkeypatch.setattr(settings, "write_timeout", 0.2)

    response = client.get("/api/analytics/sum")
    assert response.status_code == 503
    assert response.json() == {"detail": "request timed out"}
