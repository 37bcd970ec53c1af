"""Pydantic models for users and authentication."""

from pydantic import Field

from spec_manager.models.common import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserSummary(CamelModel):
    id: str
    email: str
    full_name: str
    roles: list[str]


class LoginResponse(CamelModel):
    token: str
    user: UserSummary


class AuthorSummary(CamelModel):
    """Minimal author projection embedded in specification details."""

    id: str
    full_name: str
    email: str
