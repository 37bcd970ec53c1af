"""Rate limiting using slowapi."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from spec_manager.config import settings
from spec_manager.errors.handlers import error_response

logger = logging.getLogger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Use user_id for authenticated users, IP for anonymous."""
    user = getattr(request.state, "user", None) or {}
    sub = user.get("sub", "")
    if sub:
        return f"user:{sub}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.default_rate_limit],
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)

# Stricter limit for the login endpoint; the decorated route must take ``request: Request``.
auth_limit = limiter.limit(settings.auth_rate_limit)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("rate_limit_exceeded path=%s limit=%s", request.url.path, exc.detail)
    return error_response(
        429,
        "RATE_LIMIT_EXCEEDED",
        "Too many requests, please try again later",
        {"limit": str(exc.detail)},
    )


def setup_rate_limiter(app: FastAPI) -> None:
    """Attach the slowapi limiter, its middleware and the 429 envelope to the app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    if settings.rate_limit_enabled:
        logger.info("Rate limiter configured (default=%s, login=%s, storage=%s)",
                    settings.default_rate_limit, settings.auth_rate_limit,
                    settings.rate_limit_storage_uri.split("://")[0])
    else:
        logger.info("Rate limiting disabled")
