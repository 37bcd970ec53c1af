"""Role, user and user-role link tables."""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spec_manager.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class RoleRow(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "roles"

    role_name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)


class UserRow(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)

    user_roles: Mapped[list["UserRoleRow"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def roles(self) -> list[str]:
        return [ur.role.role_name for ur in self.user_roles]


class UserRoleRow(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),)

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False
    )

    user: Mapped[UserRow] = relationship(back_populates="user_roles")
    role: Mapped[RoleRow] = relationship(lazy="joined")
