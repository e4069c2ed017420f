"""Error Handlers — map exceptions raised by the component and payload routes to JSON envelopes.

Invariants:
    - CartonError → its own http_status and to_response() envelope
    - Client-side failures (4xx) log at WARNING, infrastructure failures (5xx) at ERROR
    - component_id / payload_id from the error context are attached to the log record
    - Any other exception → 500 INTERNAL_ERROR, no internal details in the body
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from carton.core.errors import CartonError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartonError, carton_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def carton_error_handler(request: Request, exc: CartonError) -> JSONResponse:
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"{request.method} {request.url.path} → {exc.http_status} {exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "component_id": exc.context.component_id,
            "payload_id": exc.context.payload_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
