"""Password hashing (bcrypt) and bearer-token signing (python-jose)."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from spec_manager.config import settings

logger = logging.getLogger(__name__)


class TokenError(ValueError):
    """Raised for any token that fails signature, issuer or expiry checks."""


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    email: str
    roles: list[str] = field(default_factory=list)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(payload: TokenPayload, expires_in: int | None = None) -> str:
    """Sign a token carrying the user id (``sub``), email and roles."""
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else settings.jwt_expires_in_seconds
    claims = {
        "sub": payload.user_id,
        "email": payload.email,
        "roles": list(payload.roles),
        "iss": settings.jwt_issuer,
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    token = jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    logger.debug("Access token issued for user %s", payload.user_id)
    return token


def verify_access_token(token: str) -> TokenPayload:
    """Check signature, issuer and expiry and return the payload.

    Raises:
        TokenError: for every kind of invalid token.
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise TokenError("Invalid or expired token") from exc

    user_id = claims.get("sub")
    if not user_id:
        raise TokenError("Invalid token payload")
    return TokenPayload(user_id=user_id, email=claims.get("email", ""), roles=claims.get("roles", []))


def decode_access_token(token: str) -> TokenPayload | None:
    """Read the payload without verifying it; None for undecodable tokens."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    if not claims.get("sub"):
        return None
    return TokenPayload(user_id=claims["sub"], email=claims.get("email", ""), roles=claims.get("roles", []))
