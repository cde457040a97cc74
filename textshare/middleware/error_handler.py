# textshare/middleware/error_handler.py
# Structured error handling middleware
# Catches unhandled exceptions and returns consistent JSON responses

import traceback
import logging
from typing import Callable
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from textshare.errors import AppError
from textshare.utils.logger import log_exception

logger = logging.getLogger(__name__)


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    details: dict = None,
    request_id: str = None
) -> JSONResponse:
    """Create a standardized JSON error response."""
    content = {
        "error": {
            "code": error_code,
            "message": message,
        }
    }

    if details:
        content["error"]["details"] = details

    if request_id:
        content["error"]["request_id"] = request_id

    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and returns
    consistent JSON error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID", str(id(request)))

        try:
            response = await call_next(request)
            return response

        except AppError as e:
            # Known application errors
            logger.warning(
                f"AppError: {e.error_code} - {e.message}",
                extra={"request_id": request_id, "path": request.url.path}
            )
            return create_error_response(
                error_code=e.error_code,
                message=e.message,
                status_code=e.status_code,
                details=e.details,
                request_id=request_id
            )

        except Exception as e:
            error_details = None
            if self.debug:
                error_details = {
                    "type": type(e).__name__,
                    "traceback": traceback.format_exc()
                }

            log_exception(e, context=f"Unhandled error on {request.url.path}")
            logger.error(
                f"Unhandled exception: {type(e).__name__}: {str(e)}",
                extra={"request_id": request_id, "path": request.url.path},
                exc_info=True
            )

            return create_error_response(
                error_code="INTERNAL_ERROR",
                message="An internal error occurred. Please try again later.",
                status_code=500,
                details=error_details,
                request_id=request_id
            )


def setup_exception_handlers(app):
    """Register exception handlers on FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.info(f"AppError: {exc.error_code} on {request.url.path}")
        return create_error_response(
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return create_error_response(
            error_code="HTTP_ERROR",
            message=str(exc.detail),
            status_code=exc.status_code
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return create_error_response(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            status_code=422,
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log_exception(exc, context=f"Unhandled error on {request.url.path}")
        return create_error_response(
            error_code="INTERNAL_ERROR",
            message="An internal error occurred",
            status_code=500
        )
