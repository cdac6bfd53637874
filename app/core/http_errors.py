# /app/core/http_errors.py

from fastapi import HTTPException, status

from .errors import ErrorKind, Result

ERROR_KIND_HEADER = "X-Error-Kind"

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # Literal: the Starlette constant for 422 was renamed across releases.
    ErrorKind.VALIDATION: 422,
}


def unwrap_or_raise(result: Result):
    """
    The HTTP edge of a procedure: returns the value of a successful result
    and turns a failed one into an HTTPException carrying the message.
    """
    if result.is_ok:
        return result.value
    error = result.error
    raise HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.message,
        headers={ERROR_KIND_HEADER: error.kind.value},
    )


def require_found(value, message: str):
    """Answers 404 for a query procedure that returned nothing."""
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message,
            headers={ERROR_KIND_HEADER: ErrorKind.NOT_FOUND.value},
        )
    return value
