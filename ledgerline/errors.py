"""
Domain error kinds and their HTTP status mapping.

Repositories raise the typed errors below. Services wrap anything that
escapes them in a ServiceError carrying a domain prefix ("create item",
"analytics sum", ...), keeping the original exception as the cause so the
HTTP layer can still pick the right status code.
"""

from contextlib import contextmanager
from typing import Iterator, Optional


class LedgerlineError(Exception):
    """Base class for errors with a client-facing meaning."""

    status_code = 500


class InvalidInputError(LedgerlineError):
    """Malformed or out-of-range input."""

    status_code = 400


class NotFoundError(LedgerlineError):
    """Entity absent on point lookup, or no row affected by update/delete."""

    status_code = 404


class CategoryNotFoundError(NotFoundError):
    def __init__(self, message: str = "category not found"):
        super().__init__(message)


class ItemNotFoundError(NotFoundError):
    def __init__(self, message: str = "item not found"):
        super().__init__(message)


class NoneFoundError(LedgerlineError):
    """A collection listing returned no rows."""

    status_code = 404


class NoCategoriesFoundError(NoneFoundError):
    def __init__(self, message: str = "no categories found"):
        super().__init__(message)


class ConflictError(LedgerlineError):
    status_code = 409


class CategoryInUseError(ConflictError):
    def __init__(self, message: str = "category has subcategories or items"):
        super().__init__(message)


class RequestCancelledError(LedgerlineError):
    """The client went away and its query was cancelled."""

    status_code = 499

    def __init__(self, message: str = "client closed request"):
        super().__init__(message)


class RequestTimeoutError(LedgerlineError):
    """The response was not ready within the write timeout; the query was cancelled."""

    status_code = 503

    def __init__(self, message: str = "request timed out"):
        super().__init__(message)


class ServiceError(Exception):
    """A failure inside a service operation, prefixed with the operation name."""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


def root_cause(exc: BaseException) -> BaseException:
    """Unwrap nested ServiceErrors down to the original exception."""
    while isinstance(exc, ServiceError):
        exc = exc.cause
    return exc


def status_for(exc: BaseException) -> int:
    cause = root_cause(exc)
    if isinstance(cause, LedgerlineError):
        return cause.status_code
    return 500


def public_message(exc: BaseException) -> Optional[str]:
    """Message safe to return to the client, or None for internal errors."""
    if isinstance(root_cause(exc), LedgerlineError):
        return str(exc)
    return None


@contextmanager
def wrap_errors(operation: str) -> Iterator[None]:
    """Re-raise anything escaping the block as ServiceError(operation, exc)."""
    try:
        yield
    except ServiceError:
        raise
    except Exception as exc:
        raise ServiceError(operation, exc) from exc
