"""Map domain and request errors onto JSON responses.

Every error body carries a ``message``. Validation failures add an
``errors`` mapping of field name to messages.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.exceptions import ForbiddenError

logger = structlog.get_logger(__name__)


def first_message(messages, default="Invalid request"):
    """Pull a human-readable sentence out of a protean ``messages`` payload."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)) and value:
                return str(value[0])
            if value:
                return str(value)
    return default


def _request_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for error in exc.errors():
        # Drop the "body"/"query" prefix so keys read like field paths
        location = [str(part) for part in error["loc"][1:]] or [str(part) for part in error["loc"]]
        errors.setdefault(".".join(location), []).append(error["msg"])
    return errors


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": first_message(exc.messages), "errors": exc.messages},
    )


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _request_errors(exc)
    field, messages = next(iter(errors.items()), ("request", ["Invalid request"]))
    return JSONResponse(
        status_code=400,
        content={"message": f"{field}: {messages[0]}", "errors": errors},
    )


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"message": first_message(getattr(exc, "messages", None), default="Not found")},
    )


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"message": exc.message})


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


async def _server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"message": "Server error", "error": str(exc)})


def register_error_handlers(app: FastAPI):
    """Install protean's default handlers, then the storefront's response shapes on top."""
    register_exception_handlers(app)

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _server_error)
