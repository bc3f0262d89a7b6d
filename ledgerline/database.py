"""
Database engines, sessions and primary/replica routing.
"""

import itertools
import logging
import threading
from typing import Any, Dict, Optional, Sequence, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ledgerline.config import Settings, settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def engine_options(url: str, config: Settings) -> Dict[str, Any]:
    """Keyword arguments for create_engine() derived from the pool limits."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    options: Dict[str, Any] = {
        "pool_size": config.max_idle_connections,
        "max_overflow": max(config.max_open_connections - config.max_idle_connections, 0),
        "pool_recycle": config.conn_max_lifetime,
        "pool_pre_ping": True,
    }
    if url.startswith("postgresql"):
        # Abandoned requests must not keep a query running server side.
        options["connect_args"] = {
            "options": f"-c statement_timeout={config.write_timeout * 1000}"
        }
    return options


class DatabasePool:
    """
    One primary engine plus zero or more read replicas.

    Writes always go to the primary. Reads rotate over the replicas and use
    the primary when none are configured.
    """

    def __init__(self, primary: Engine, replicas: Sequence[Engine] = ()):
        self.primary = primary
        self.replicas = list(replicas)

        self._write_sessions = sessionmaker(autocommit=False, autoflush=False, bind=primary)
        self._read_sessions = [
            sessionmaker(autocommit=False, autoflush=False, bind=engine)
            for engine in self.replicas
        ] or [self._write_sessions]
        self._rotation = itertools.cycle(range(len(self._read_sessions)))

    @classmethod
    def from_settings(cls, config: Settings) -> "DatabasePool":
        primary = create_engine(config.database_url, **engine_options(config.database_url, config))
        replicas = [
            create_engine(url, **engine_options(url, config))
            for url in config.database_replica_urls
        ]
        logger.info("database pool ready: primary + %d replica(s)", len(replicas))
        return cls(primary, replicas)

    def session(self, readonly: bool = False) -> Session:
        if not readonly:
            return self._write_sessions()
        return self._read_sessions[next(self._rotation)]()

    def close(self) -> None:
        """Dispose the primary first, then each replica in order."""
        try:
            self.primary.dispose()
            logger.info("closed primary database")
        except Exception:
            logger.exception("failed to close primary database")

        for index, engine in enumerate(self.replicas):
            try:
                engine.dispose()
                logger.info("closed replica database %d", index)
            except Exception:
                logger.exception("failed to close replica database %d", index)



def raw_connection(db: Session) -> Tuple[str, Any]:
    """
    Dialect name and driver connection behind the session, checking one out
    if the session has none yet. Later statements in the session use it.
    """
    connection = db.connection()
    return connection.dialect.name, connection.connection.dbapi_connection


def cancel_query(dialect_name: str, dbapi_connection: Any) -> None:
    """Ask the server to abort whatever the connection is running. Safe from any thread."""
    if dialect_name == "postgresql":
        dbapi_connection.cancel()
    elif dialect_name == "sqlite":
        dbapi_connection.interrupt()
    else:
        logger.warning("query cancellation is not supported on %s", dialect_name)


_pool: Optional[DatabasePool] = None
_pool_lock = threading.Lock()


def get_pool() -> DatabasePool:
    """Process-wide pool, created on first use."""
    global _pool
    pool = _pool
    if pool is None:
        # Sync routes run in a thread pool; only one of them may build it
        with _pool_lock:
            if _pool is None:
                _pool = DatabasePool.from_settings(settings)
            pool = _pool
    return pool


def close_pool() -> None:
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.close()
            _pool = None
