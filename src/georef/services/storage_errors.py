"""Classification of storage-layer errors.

Services use these helpers right after a repository call so no raw
database error reaches the HTTP layer.
"""

from sqlalchemy.exc import DBAPIError

from georef.exceptions import ErrorMessage, HttpError
from georef.logging import get_logger

logger = get_logger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"


def sqlstate(exc: DBAPIError) -> str | None:
    """Return the PostgreSQL SQLSTATE carried by the driver error, if any."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return str(code) if code is not None else None


def is_unique_violation(exc: DBAPIError) -> bool:
    return sqlstate(exc) == UNIQUE_VIOLATION


def is_foreign_key_violation(exc: DBAPIError) -> bool:
    return sqlstate(exc) == FOREIGN_KEY_VIOLATION


def is_check_violation(exc: DBAPIError) -> bool:
    return sqlstate(exc) == CHECK_VIOLATION


def server_error(operation: str, exc: Exception) -> HttpError:
    """Log an unclassified storage failure and return a generic 500."""
    logger.error("storage_error", operation=operation, error=str(exc), exc_info=exc)
    return HttpError.server_error(ErrorMessage.SERVER_ERROR)
