"""Translation of service exceptions into HTTP errors."""

import logging

from fastapi import HTTPException, status

from config.settings import Settings
from services.errors import ProfileServiceError

logger = logging.getLogger(__name__)


def http_error(exc: ProfileServiceError) -> HTTPException:
    """Map a domain exception to its status code with a short message."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def internal_error(exc: Exception, settings: Settings, message: str) -> HTTPException:
    """
    Log an unexpected failure and build a generic 500.

    The exception text is only exposed when settings.DEBUG is on.
    """
    logger.exception(f"{message}: {exc}")
    detail = f"{message}: {str(exc)}" if settings.DEBUG else message
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
