"""Error taxonomy and the JSON error rendering shared by every endpoint."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class WebhookSinkError(Exception):
    """Base error. ``message`` is safe to return to the caller."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class AuthenticationRequired(WebhookSinkError):
    status_code = 401
    message = "Access token required"


class InvalidToken(WebhookSinkError):
    status_code = 403
    message = "Invalid token"


class MalformedPayload(WebhookSinkError):
    status_code = 400
    message = "Invalid JSON payload"


class PayloadTooLarge(WebhookSinkError):
    status_code = 413
    message = "Payload too large"


class StorageWriteError(WebhookSinkError):
    """Writing a record failed. Keeps the attempted filename and the cause
    for server-side logs; the caller only ever sees ``message``."""

    status_code = 500
    message = "Failed to save webhook data"

    def __init__(self, filename: str, cause: Exception):
        super().__init__()
        self.filename = filename
        self.cause = cause

    def __str__(self):
        return f"could not write {self.filename}: {self.cause}"


class StorageInitError(WebhookSinkError):
    message = "Storage directory unavailable"


def error_body(message: str) -> dict:
    return {"error": message}


async def webhook_sink_error_handler(request: Request, exc: WebhookSinkError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body(WebhookSinkError.message))


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(WebhookSinkError, webhook_sink_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
