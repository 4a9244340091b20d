"""
Transaction Helper Service

Commit/rollback handling for service methods and translation of database
driver failures into StorageError.
"""

from functools import wraps
from typing import Callable
import logging
from sqlalchemy.exc import SQLAlchemyError
from app import db
from .errors import StorageError

logger = logging.getLogger(__name__)

class TransactionHelper:
    """Helper class for managing database transactions safely"""

    @staticmethod
    def with_transaction(func: Callable) -> Callable:
        """
        Decorator that wraps a function in a database transaction.
        Commits when the function returns, rolls back when it raises.
        Failures are not retried.

        Usage:
            @TransactionHelper.with_transaction
            def delete(self, driver_id):
                # Your database operations here
                pass
        """
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
                db.session.commit()
                return result
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Transaction failed in {func.__name__}: {str(e)}")
                raise StorageError(f"Database operation failed: {e.__class__.__name__}") from e
            except Exception:
                db.session.rollback()
                raise
        return wrapper

    @staticmethod
    def with_storage_errors(func: Callable) -> Callable:
        """
        Decorator for read-only operations: database failures surface as
        StorageError, everything else propagates unchanged.
        """
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Database read failed in {func.__name__}: {str(e)}")
                raise StorageError(f"Database operation failed: {e.__class__.__name__}") from e
        return wrapper
