# ============================================================================
# FILE: app/core/exceptions.py
# Error taxonomy and the handlers that render it as the failure envelope
# ============================================================================
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors or []
        self.headers = headers
        super().__init__(self.message)


class InvalidArgument(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized request"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        super().__init__(message, errors, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class NotFoundOrForbidden(NotFound):
    """Raised when a missing entity and someone else's entity must look the same"""

    default_message = "Resource not found or you are not authorized to modify it"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class PersistenceError(ApiError):
    default_message = "Something went wrong while saving your changes"


class StoreError(ApiError):
    default_message = "Something went wrong while accessing the data store"


class MediaUploadError(PersistenceError):
    default_message = "Something went wrong while uploading the file"


def error_body(status_code: int, message: str, errors: Optional[List[Any]] = None) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "message": message,
        "success": False,
        "errors": errors or [],
    }


async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.status_code, exc.message, exc.errors)),
        headers=exc.headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    message = errors[0]["message"] if errors else InvalidArgument.default_message
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(error_body(status.HTTP_400_BAD_REQUEST, message, errors)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Store error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=StoreError.status_code,
        content=error_body(StoreError.status_code, StoreError.default_message),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI):
    """Route every failure through the uniform error envelope"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
