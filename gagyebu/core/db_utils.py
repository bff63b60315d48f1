"""
Database utilities for write error handling
"""
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')

# Prefix shown in front of the store's own message
WRITE_FAILED_LABEL = "저장에 실패했습니다"


class StoreWriteError(Exception):
    """The store rejected an insert, update or delete."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return f"{WRITE_FAILED_LABEL}: {self.message}"


def _raw_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def with_store_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Decorator for crud writes: roll the session back and re-raise any
    SQLAlchemy error as a StoreWriteError carrying the raw store message.

    No retry is attempted; the caller decides what to show.
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            message = _raw_message(e)
            logger.error(f"Store write {func.__name__} failed: {message}")
            for value in list(args) + list(kwargs.values()):
                if isinstance(value, AsyncSession):
                    await value.rollback()
                    break
            raise StoreWriteError(message) from e

    return cast(Callable[..., Awaitable[T]], wrapper)
