"""Tests for primary/replica routing and pool settings."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import create_engine

from ledgerline import database
from ledgerline.config import Settings
from ledgerline.database import DatabasePool, engine_options


def sqlite_engine():
    return create_engine("sqlite:///:memory:")


class TestDatabasePool:

    def test_writes_use_primary(self):
        primary = sqlite_engine()
        pool = DatabasePool(primary, [sqlite_engine()])
        session = pool.session()
        assert session.get_bind() is primary
        session.close()

    def test_reads_rotate_over_replicas(self):
        replicas = [sqlite_engine(), sqlite_engine()]
        pool = DatabasePool(sqlite_engine(), replicas)

        binds = []
        for _ in range(4):
            session = pool.session(readonly=True)
            binds.append(session.get_bind())
            session.close()
        assert binds == [replicas[0], replicas[1], replicas[0], replicas[1]]

    def test_reads_fall_back_to_primary(self):
        primary = sqlite_engine()
        pool = DatabasePool(primary)
        session = pool.session(readonly=True)
        assert session.get_bind() is primary
        session.close()

    def test_close_disposes_primary_then_replicas(self, caplog):
        pool = DatabasePool(sqlite_engine(), [sqlite_engine(), sqlite_engine()])
        with caplog.at_level(logging.INFO, logger="ledgerline.database"):
            pool.close()
        assert [r.getMessage() for r in caplog.records] == [
            "closed primary database",
            "closed replica database 0",
            "closed replica database 1",
        ]

    def test_close_continues_after_failure(self, caplog, monkeypatch):
        primary = sqlite_engine()
        replica = sqlite_engine()

        def fail():
            raise RuntimeError("dispose failed")

        monkeypatch.setattr(primary, "dispose", fail)
        pool = DatabasePool(primary, [replica])
        with caplog.at_level(logging.INFO, logger="ledgerline.database"):
            pool.close()
        messages = [r.getMessage() for r in caplog.records]
        assert "failed to close primary database" in messages
        assert "closed replica database 0" in messages


class TestEngineOptions:

    def test_postgres_pool_limits(self):
        config = Settings(
            max_open_connections=30,
            max_idle_connections=10,
            conn_max_lifetime=600,
            write_timeout=7,
        )
        options = engine_options("postgresql+psycopg://u:p@db/ledger", config)
        assert options["pool_size"] == 10
        assert options["max_overflow"] == 20
        assert options["pool_recycle"] == 600
        assert options["connect_args"] == {"options": "-c statement_timeout=7000"}

    def test_sqlite_has_no_pool_limits(self):
        options = engine_options("sqlite:///ledger.db", Settings())
        assert "pool_size" not in options


class TestProcessPool:
    """The process-wide pool behind the session dependencies."""

    def test_concurrent_first_use_builds_one_pool(self, monkeypatch):
        monkeypatch.setattr(database, "_pool", None)
        built = []
        start = threading.Barrier(8)

        def from_settings(config):
            time.sleep(0.05)
            pool = DatabasePool(sqlite_engine())
            built.append(pool)
            return pool

        monkeypatch.setattr(DatabasePool, "from_settings", staticmethod(from_settings))

        def first_use():
            start.wait()
            return database.get_pool()

        with ThreadPoolExecutor(max_workers=8) as executor:
            pools = list(executor.map(lambda _: first_use(), range(8)))

        assert len(built) == 1
        assert all(pool is built[0] for pool in pools)

        database.close_pool()
        assert database._pool is None
