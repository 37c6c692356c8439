from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.exceptions import ApiError

logger = logging.getLogger("app.api_errors")


def error_body(exc: ApiError) -> dict:
    body: dict = {"error": exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        # IMPORTANT: do not log request bodies or query values.
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        log = logger.warning if exc.status_code >= 500 else logger.info
        log(
            "Request failed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))
