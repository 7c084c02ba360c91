"""Translate use case errors into HTTP errors."""

from fastapi import HTTPException, status

from avdmanager.application.errors import ConflictError, NotFoundError


def to_http_exception(exc: ValueError) -> HTTPException:
    """Map a :class:`ValueError` raised by a use case to an HTTP error.

    Missing entities give 404, conflicts 409, and every other rejection,
    including invalid status transitions, 400.
    """

    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=status_code, detail=str(exc))


__all__ = ["to_http_exception"]
