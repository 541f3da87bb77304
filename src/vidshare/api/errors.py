"""Translation of domain exceptions into JSON error responses."""

from __future__ import annotations

import logging
from typing import Dict, List, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vidshare.db.connection import PoolTimeoutError
from vidshare.services.auth import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)
from vidshare.services.comments import CommentNotFoundError, CommentPermissionError
from vidshare.services.media import MediaNotConfiguredError, MediaUploadError, UnsupportedMediaError
from vidshare.services.videos import VideoNotFoundError, VideoPermissionError

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[Exception], int] = {
    VideoNotFoundError: status.HTTP_404_NOT_FOUND,
    CommentNotFoundError: status.HTTP_404_NOT_FOUND,
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    VideoPermissionError: status.HTTP_403_FORBIDDEN,
    CommentPermissionError: status.HTTP_403_FORBIDDEN,
    EmailAlreadyRegisteredError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_400_BAD_REQUEST,
    UnsupportedMediaError: status.HTTP_400_BAD_REQUEST,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    MediaUploadError: status.HTTP_502_BAD_GATEWAY,
    MediaNotConfiguredError: status.HTTP_503_SERVICE_UNAVAILABLE,
    PoolTimeoutError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error_details(exc: RequestValidationError) -> List[Dict[str, object]]:
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    """Attach handlers so every failure is returned as ``{"message": ...}``."""

    async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
        status_code = next(
            (code for exc_type, code in ERROR_STATUS.items() if isinstance(exc, exc_type)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        return JSONResponse(status_code=status_code, content={"message": str(exc)})

    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request", "errors": _error_details(exc)},
        )

    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server error"},
        )

    for exc_type in ERROR_STATUS:
        app.add_exception_handler(exc_type, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


__all__ = ["ERROR_STATUS", "register_error_handlers"]
