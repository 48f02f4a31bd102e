import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.logging_config import get_logger

logger = get_logger("app.access")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    Each request gets a unique ID, exposed on ``request.state.request_id``
    and echoed back in the ``X-Request-ID`` response header.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        path = request.url.path
        method = request.method
        client_host = request.client.host if request.client else "unknown"

        req_logger = get_logger("app.access", request_id=request_id)

        # Authorization headers are never logged
        req_logger.info(
            f"Request received: {method} {path}",
            extra={
                "http": {
                    "method": method,
                    "path": path,
                    "client_ip": client_host,
                    "query_params": str(request.query_params),
                }
            }
        )

        start_time = time.time()

        try:
            request.state.request_id = request_id

            response = await call_next(request)

            process_time = time.time() - start_time
            response.headers["X-Request-ID"] = request_id

            req_logger.info(
                f"Response sent: {response.status_code} in {process_time:.3f}s",
                extra={
                    "http": {
                        "status_code": response.status_code,
                        "processing_time": process_time,
                    }
                }
            )

            return response

        except Exception as e:
            process_time = time.time() - start_time

            req_logger.error(
                f"Request failed: {str(e)}",
                exc_info=True,
                extra={
                    "http": {
                        "processing_time": process_time,
                        "error": str(e),
                    }
                }
            )

            # Re-raise the exception to be handled by exception handlers
            raise
