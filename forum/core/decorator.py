import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class DBException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def db_exception(func):
    """Turn SQLAlchemy failures inside a store call into DBException."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError as e:
            # Foreign key or check constraint rejected the write
            logger.warning(f"Integrity error in {func.__name__}: {e.orig}")
            raise DBException("Constraint violation: write rejected", 409) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error in {func.__name__}: {type(e).__name__}")
            raise DBException("Database error occurred", 500) from e

    return wrapper
