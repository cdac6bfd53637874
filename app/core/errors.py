# /app/core/errors.py

"""
The error taxonomy shared by every procedure.

Procedures never raise across their boundary. They return a `Result` that
holds either the value or a `ProcedureError` tagged with an `ErrorKind`, and
every caller (HTTP endpoints, the page renderer, tests) checks it explicitly.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from ..db.errors import RecordNotFoundError

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    VALIDATION = "VALIDATION"


@dataclass(frozen=True)
class ProcedureError:
    kind: ErrorKind
    message: str
    cause: Optional[BaseException] = None


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ProcedureError] = None

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, cause: Optional[BaseException] = None) -> "Result[T]":
        return cls(error=ProcedureError(kind=kind, message=message, cause=cause))

    def unwrap(self) -> T:
        """Returns the value, or raises when called on a failed result."""
        if self.error is not None:
            raise RuntimeError(f"{self.error.kind.value}: {self.error.message}") from self.error.cause
        return self.value


def store_failure(message: str, exc: BaseException, logger: logging.Logger) -> Result:
    """
    Logs a store/service failure and maps it onto the taxonomy.
    A missing record keeps its NOT_FOUND meaning; everything else is internal.
    """
    logger.error("%s: %s", message, exc, exc_info=exc)
    if isinstance(exc, RecordNotFoundError):
        return Result.fail(ErrorKind.NOT_FOUND, str(exc), cause=exc)
    return Result.fail(ErrorKind.INTERNAL_SERVER_ERROR, message, cause=exc)


def unauthorized() -> Result:
    return Result.fail(ErrorKind.UNAUTHORIZED, "You must be logged in to access this resource")
