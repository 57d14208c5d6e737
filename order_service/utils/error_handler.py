"""
Error types and HTTP error rendering for the order API
"""

import uuid
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"

class ErrorContext:
    """Context object for tracking error information across the request lifecycle"""

    def __init__(self, request: Request):
        self.request_id = str(uuid.uuid4())
        self.endpoint = str(request.url.path)
        self.method = request.method
        self.client_ip = self._get_client_ip(request)

    @staticmethod
    def _get_client_ip(request: Request) -> Optional[str]:
        """Extract client IP from request headers"""
        if "x-forwarded-for" in request.headers:
            return request.headers["x-forwarded-for"].split(",")[0].strip()
        elif "x-real-ip" in request.headers:
            return request.headers["x-real-ip"]
        elif request.client:
            return request.client.host
        return None

    def as_log_extra(self) -> dict:
        return {
            "request_id": self.request_id,
            "endpoint": self.endpoint,
            "method": self.method,
            "client_ip": self.client_ip,
        }

class DatabaseError(Exception):
    """Custom exception for database-related errors"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ValidationFailed(Exception):
    """Request body violated one or more field rules"""
    def __init__(self, errors: list[dict]):
        self.errors = errors
        super().__init__(f"{len(errors)} validation error(s)")

async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.info(
        f"Rejected {request.method} {request.url.path}: {len(exc.errors)} validation error(s)",
        extra={"endpoint": str(request.url.path), "method": request.method, "errors": exc.errors},
    )
    return JSONResponse(status_code=400, content={"errors": exc.errors})

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException as ``{"error": detail}``"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log everything, leak nothing"""
    error_context = ErrorContext(request)
    logger.error(
        f"Unhandled exception {error_context.request_id}: {type(exc).__name__} "
        f"in {error_context.method} {error_context.endpoint}",
        extra={
            **error_context.as_log_extra(),
            "error_type": type(exc).__name__,
            "error_message": str(exc),
        },
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
