"""Translate domain exceptions into HTTP errors."""

import logging

from fastapi import HTTPException, status

from question_bank.errors import (
    InsufficientContentError,
    LLMError,
    PDFProcessingError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, InsufficientContentError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, PDFProcessingError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, LLMError):
        code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, LookupError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValueError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.error("request failed (%s): %s", type(exc).__name__, exc)
    detail = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    return HTTPException(status_code=code, detail=detail)
