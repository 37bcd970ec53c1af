"""Authentication routes."""

from fastapi import APIRouter, Request

from spec_manager.api.middleware.rate_limit import auth_limit
from spec_manager.dependencies import CurrentUser, DBSession
from spec_manager.errors.exceptions import AuthenticationError
from spec_manager.models.common import ok
from spec_manager.models.user import LoginRequest, UserSummary
from spec_manager.repositories.user_repo import UserRepository
from spec_manager.services import auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login")
@auth_limit
async def login(request: Request, body: LoginRequest, db: DBSession) -> dict:
    result = await auth_service.login(db, body.email, body.password)
    return ok(result)


@router.get("/me")
async def me(user: CurrentUser, db: DBSession) -> dict:
    """Profile of the token's user, read fresh from the database."""
    row = await UserRepository(db).get(user["sub"])
    if row is None:
        raise AuthenticationError("User no longer exists")
    return ok(UserSummary(id=row.id, email=row.email, full_name=row.full_name, roles=row.roles))
