"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator, Iterable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.errors.exceptions import AuthenticationError, AuthorizationError
from spec_manager.models.enums import RoleName


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


async def get_current_user(request: Request) -> dict:
    """Return the authenticated user dict or raise 401.

    The auth middleware leaves ``_auth_error`` on the user when the header
    is missing, malformed or carries an invalid token.
    """
    user = getattr(request.state, "user", None) or {}
    if "_auth_error" in user:
        raise AuthenticationError(user["_auth_error"])
    if not user.get("sub"):
        raise AuthenticationError("Authentication required")
    return user


def has_any(user_roles: Iterable[str], required_roles: Iterable[str]) -> bool:
    """True when the user holds at least one of the required roles."""
    return not set(user_roles).isdisjoint(required_roles)


def require_role(*roles: str):
    """Return a dependency that enforces one of the given roles."""

    async def _check(user: dict = Depends(get_current_user)) -> dict:
        if not has_any(user.get("roles", []), roles):
            raise AuthorizationError(f"Requires one of: {', '.join(roles)}")
        return user

    return _check


# Type aliases for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
RequireAdmin = Depends(require_role(RoleName.ADMINISTRATOR))
