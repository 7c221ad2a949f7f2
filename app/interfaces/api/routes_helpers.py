"""Helper utilities shared across API route handlers."""

import logging

from fastapi import HTTPException, status

from app.domain.exceptions import (
    DispatchError,
    EvenzaError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[EvenzaError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (DispatchError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def http_error_from(exc: EvenzaError) -> HTTPException:
    """Translate a domain error into the matching ``HTTPException``."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            if status_code >= 500:
                logger.error("Request failed: %s", exc.message)
            return HTTPException(status_code=status_code, detail=exc.message)
    logger.error("Unmapped application error: %s", exc.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
