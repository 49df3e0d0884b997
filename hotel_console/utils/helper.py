import logging
from enum import Enum
from functools import wraps
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from hotel_console.constants.response_messages import ERROR_DATABASE_QUERY_FAILURE, SUCCESS
from hotel_console.database.db import DatabaseUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RejectReason(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_NOT_FOUND = "user_not_found"
    UNKNOWN_ROLE = "unknown_role"
    ALREADY_BOOKED = "already_booked"
    HOTEL_NOT_FOUND = "hotel_not_found"
    ROOM_NOT_FOUND = "room_not_found"
    ACCESS_DENIED = "access_denied"
    STATEMENT_FAILED = "statement_failed"


class OperationResult(BaseModel, Generic[T]):
    result: Optional[T] = None
    is_success: bool = False
    reason: Optional[RejectReason] = None
    error: Optional[str] = None
    message: str = SUCCESS

    @classmethod
    def response_handler(
        cls,
        result: T = None,
        is_success: bool = False,
        reason: RejectReason = None,
        error: str = None,
        message: str = SUCCESS,
    ) -> "OperationResult[T]":
        return cls(
            result=result,
            is_success=is_success,
            reason=reason,
            error=error,
            message=message,
        )

    @classmethod
    def ok(cls, result: T = None, message: str = SUCCESS) -> "OperationResult[T]":
        return cls.response_handler(result=result, is_success=True, message=message)

    @classmethod
    def rejected(cls, reason: RejectReason, message: str) -> "OperationResult[T]":
        return cls.response_handler(is_success=False, reason=reason, message=message)

    @property
    def is_fault(self) -> bool:
        """True when a statement failed, as opposed to a business-rule rejection."""
        return self.reason == RejectReason.STATEMENT_FAILED


def safe_db_operation(module_name: str = "UnknownModule"):
    """
    Keep database faults inside the operation boundary.

    A failed statement is rolled back and returned as a failed OperationResult.
    Losing the connection itself is not recoverable here and is re-raised as
    DatabaseUnavailable.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except DatabaseUnavailable:
                raise
            except DBAPIError as e:
                if e.connection_invalidated:
                    raise DatabaseUnavailable(str(e)) from e
                return _statement_failure(self, module_name, e)
            except SQLAlchemyError as e:
                return _statement_failure(self, module_name, e)
        return wrapper
    return decorator


def _statement_failure(service, module_name: str, error: Exception) -> OperationResult:
    client = getattr(service, "client", None)
    if client is not None:
        client.rollback()
    logger.warning("[%s] SQLAlchemy Error: %s", module_name, error)
    return OperationResult.response_handler(
        result=None,
        is_success=False,
        reason=RejectReason.STATEMENT_FAILED,
        error=str(error),
        message=ERROR_DATABASE_QUERY_FAILURE.format(error=error),
    )
