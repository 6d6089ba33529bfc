"""Shared helpers for SQLAlchemy-backed repositories."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    DisconnectionError,
    IntegrityError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from clinic.core.exceptions import TransientStoreError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def store_operation(db, operation: str):
    """Translate store failures unrelated to the data into TransientStoreError.

    IntegrityError is data-related and propagates unchanged so the caller can
    map it (e.g. a unique violation on national_id). DataError (a value the
    column cannot hold) becomes ValidationError. The session is rolled back
    in every case.
    """
    try:
        yield
    except IntegrityError:
        db.rollback()
        raise
    except DataError as exc:
        db.rollback()
        logger.info(
            "Store rejected value",
            extra={"context": {"operation": operation, "error": type(exc).__name__}},
        )
        raise ValidationError(
            "A value does not fit the records store",
            details={"operation": operation},
        ) from exc
    except (DBAPIError, DisconnectionError, PoolTimeoutError) as exc:
        db.rollback()
        logger.error(
            "Store operation failed",
            extra={"context": {"operation": operation, "error": type(exc).__name__}},
            exc_info=True,
        )
        raise TransientStoreError(
            "The records store is unavailable, try again",
            details={"operation": operation},
        ) from exc
