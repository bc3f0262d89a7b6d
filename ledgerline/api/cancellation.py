"""
Cancellation of in-flight read queries.

Read endpoints run their service call in the thread pool while the event
loop watches the request. If the client disconnects, or the response is not
ready within ``write_timeout``, the query is cancelled on the database
connection and the call fails with RequestCancelledError or
RequestTimeoutError.
"""

import logging
from typing import Any, Callable, Optional

import anyio
from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from ledgerline.config import settings
from ledgerline.database import cancel_query, raw_connection
from ledgerline.errors import LedgerlineError, RequestCancelledError, RequestTimeoutError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.05  # seconds


class QueryWatch:
    """Watches one request and cancels its query when the request is abandoned."""

    def __init__(self, request: Request, dialect_name: str, dbapi_connection: Any, timeout: float):
        self.request = request
        self.dialect_name = dialect_name
        self.dbapi_connection = dbapi_connection
        self.timeout = timeout
        self.reason: Optional[LedgerlineError] = None

    async def run(self) -> None:
        deadline = anyio.current_time() + self.timeout
        while self.reason is None:
            if await self.request.is_disconnected():
                self.reason = RequestCancelledError()
            elif anyio.current_time() >= deadline:
                self.reason = RequestTimeoutError()
            else:
                await anyio.sleep(POLL_INTERVAL)

        logger.warning(
            "%s %s: %s, cancelling query", self.request.method, self.request.url.path, self.reason
        )
        # A cancel that lands before the statement starts is a no-op, so keep
        # cancelling until the worker returns and this task is cancelled.
        while True:
            cancel_query(self.dialect_name, self.dbapi_connection)
            await anyio.sleep(POLL_INTERVAL)


async def run_cancellable(
    request: Request,
    db: Session,
    func: Callable[..., Any],
    *args: Any,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> Any:
    """
    Call ``func(db, *args, **kwargs)`` in the thread pool, cancelling its
    query if the client disconnects or ``timeout`` (default
    ``settings.write_timeout``) elapses first.
    """
    dialect_name, dbapi_connection = await run_in_threadpool(raw_connection, db)
    watch = QueryWatch(
        request,
        dialect_name,
        dbapi_connection,
        settings.write_timeout if timeout is None else timeout,
    )

    error: Optional[Exception] = None
    result: Any = None
    async with anyio.create_task_group() as task_group:
        task_group.start_soon(watch.run)
        try:
            result = await run_in_threadpool(func, db, *args, **kwargs)
        except Exception as exc:
            error = exc
        task_group.cancel_scope.cancel()

    if error is not None:
        if watch.reason is not None:
            raise watch.reason from error
        raise error
    return result
