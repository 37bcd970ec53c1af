"""Shared pydantic models: camelCase base, envelopes and pagination."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


MAX_PAGE = 1_000_000


class PageParams(BaseModel):
    """Clamped page/limit pair; the page cap keeps the SQL offset in range."""

    page: int = Field(1)
    limit: int = Field(10)

    @classmethod
    def clamp(cls, page: int, limit: int) -> "PageParams":
        return cls(page=min(MAX_PAGE, max(1, page)), limit=min(100, max(1, limit)))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def paginate(self, total: int) -> Pagination:
        total_pages = -(-total // self.limit)
        return Pagination(page=self.page, limit=self.limit, total=total, total_pages=total_pages)


def ok(data: Any) -> dict:
    """Wrap a payload in the success envelope, serializing models by alias."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    elif isinstance(data, list):
        data = [d.model_dump(mode="json", by_alias=True) if isinstance(d, BaseModel) else d for d in data]
    return {"success": True, "data": data}
