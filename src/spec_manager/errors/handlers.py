"""FastAPI exception handlers producing the ``{success, error}`` envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from spec_manager.config import settings
from spec_manager.errors.exceptions import AuthorizationError, ConflictError, SpecManagerError
from spec_manager.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    429: "RATE_LIMIT_EXCEEDED",
}


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(SpecManagerError)
    async def spec_manager_error_handler(request: Request, exc: SpecManagerError):
        user = getattr(request.state, "user", {}) or {}
        if isinstance(exc, AuthorizationError):
            logger.warning(
                "access_denied",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "user_id": user.get("sub", "anonymous"),
                    "user_roles": user.get("roles", []),
                    "reason": exc.message,
                },
            )
        else:
            logger.info(
                "request_failed code=%s status=%d path=%s",
                exc.code,
                exc.status_code,
                request.url.path,
            )
        return error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"})
        first = errors[0] if errors else {}
        location = ".".join(str(p) for p in first.get("loc", []) if p != "body")
        message = f"{location}: {first.get('msg')}" if location else "Invalid request"
        return error_response(400, "VALIDATION_ERROR", message, errors)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("integrity_error path=%s", request.url.path)
        conflict = ConflictError(details=str(exc.orig) if not settings.is_production else None)
        return error_response(conflict.status_code, conflict.code, conflict.message, conflict.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Route {request.method} {request.url.path} not found"
        else:
            message = str(exc.detail)
        code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
        return error_response(exc.status_code, code, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error path=%s method=%s", request.url.path, request.method)
        details = None
        if not settings.is_production:
            details = {"message": str(exc), "type": type(exc).__name__}
        return error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred", details)
