"""Maps marketplace errors onto HTTP responses.

Every error body has the shape `{"success": false, "message": ...}`.
Unexpected exceptions are logged and answered with a generic 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.errors import Forbidden, PreconditionFailed, Unauthorized

logger = structlog.get_logger(__name__)


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        parts = []
        for value in messages.values():
            parts.extend(value if isinstance(value, list | tuple) else [value])
        return "; ".join(str(p) for p in parts)
    return str(messages)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def _unauthorized(request: Request, exc: Unauthorized) -> JSONResponse:
    return _failure(401, exc.message)


async def _forbidden(request: Request, exc: Forbidden) -> JSONResponse:
    return _failure(403, exc.message)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _failure(404, _flatten(exc.args[0]) if exc.args else "Not found")


async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    status_code = 412 if isinstance(exc, PreconditionFailed) else 400
    return _failure(status_code, _flatten(exc.messages))


async def _malformed(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(f"{'.'.join(str(p) for p in err['loc'][1:])}: {err['msg']}" for err in exc.errors())
    return _failure(400, details or "Invalid request")


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return _failure(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Unauthorized, _unauthorized)
    app.add_exception_handler(Forbidden, _forbidden)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _invalid)
    app.add_exception_handler(RequestValidationError, _malformed)
    app.add_exception_handler(Exception, _unexpected)
