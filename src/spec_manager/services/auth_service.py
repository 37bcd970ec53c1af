"""Credential check and token issuing."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.errors.exceptions import AuthenticationError
from spec_manager.models.user import LoginResponse, UserSummary
from spec_manager.repositories.user_repo import UserRepository
from spec_manager.services.security import TokenPayload, create_access_token, verify_password

logger = logging.getLogger(__name__)

# One message for unknown email and wrong password alike.
INVALID_CREDENTIALS = "Invalid email or password"


async def login(session: AsyncSession, email: str, password: str) -> LoginResponse:
    """Verify credentials and return a signed token with the user's roles.

    Raises:
        AuthenticationError: unknown email or wrong password.
    """
    repo = UserRepository(session)
    user = await repo.get_by_email(email)
    if user is None:
        logger.warning("Login attempt with unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not verify_password(password, user.password_hash):
        logger.warning("Login attempt with invalid password for user %s", user.id)
        raise AuthenticationError(INVALID_CREDENTIALS)

    roles = user.roles
    token = create_access_token(TokenPayload(user_id=user.id, email=user.email, roles=roles))
    logger.info("User %s logged in (roles=%s)", user.id, ",".join(roles))
    return LoginResponse(
        token=token,
        user=UserSummary(id=user.id, email=user.email, full_name=user.full_name, roles=roles),
    )
