from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback

from core.logging_config import get_logger
from core.config import settings

logger = get_logger("app.exceptions")

class AppException(Exception):
    """Base application exception with status code and detail"""
    def __init__(self, status_code: int, detail: str, errors: list | None = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.errors = errors

def setup_exception_handlers(app: FastAPI):
    """Configure global exception handlers for the application"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle standard HTTP exceptions"""
        request_id = getattr(request.state, "request_id", None)
        exception_logger = get_logger("app.exceptions", request_id=request_id)

        exception_logger.warning(
            f"HTTP exception: {exc.status_code} - {exc.detail}",
            extra={"http": {"status_code": exc.status_code, "path": request.url.path}}
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors with detailed information"""
        request_id = getattr(request.state, "request_id", None)
        exception_logger = get_logger("app.exceptions", request_id=request_id)

        readable_errors = []
        for error in exc.errors():
            location = " -> ".join(str(loc) for loc in error["loc"])
            readable_errors.append(f"{location}: {error['msg']}")

        exception_logger.warning(
            f"Validation error for {request.method} {request.url.path}",
            extra={"http": {"path": request.url.path, "method": request.method}}
        )

        return JSONResponse(
            status_code=400,
            content={
                "detail": "Validation error",
                "errors": readable_errors
            }
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle application-specific exceptions"""
        request_id = getattr(request.state, "request_id", None)
        exception_logger = get_logger("app.exceptions", request_id=request_id)

        exception_logger.warning(
            f"Application exception: {exc.status_code} - {exc.detail}",
            extra={"http": {"status_code": exc.status_code, "path": request.url.path}}
        )

        content = {"detail": exc.detail}
        if exc.errors is not None:
            content["errors"] = exc.errors

        return JSONResponse(
            status_code=exc.status_code,
            content=content
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """Handle any unhandled exceptions"""
        request_id = getattr(request.state, "request_id", None)
        exception_logger = get_logger("app.exceptions", request_id=request_id)

        tb = traceback.format_exception(type(exc), exc, exc.__traceback__)

        exception_logger.error(
            f"Unhandled exception: {str(exc)}",
            exc_info=True,
            extra={
                "http": {
                    "path": request.url.path,
                    "method": request.method
                }
            }
        )

        # In production, don't return the actual error message
        if settings.ENVIRONMENT == "production":
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error"}
            )

        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "message": str(exc),
                "traceback": tb
            }
        )
