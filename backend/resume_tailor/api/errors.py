"""Exception handlers that render the error taxonomy as JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resume_tailor.utils.errors import TailorError

logger = logging.getLogger(__name__)


async def tailor_error_handler(request: Request, exc: TailorError) -> JSONResponse:
    """Render a typed pipeline failure with its status and code."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request payloads are client errors with the same body shape."""
    fields = [".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors()]
    logger.info(f"{request.method} {request.url.path} -> 400 invalid payload: {fields}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request payload.",
            "code": "BAD_REQUEST",
            "details": {"fields": fields},
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return nothing internal."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TailorError, tailor_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
