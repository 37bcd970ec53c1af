"""Repository for User and Role records."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.db.models.user import RoleRow, UserRoleRow, UserRow
from spec_manager.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, UserRow)

    async def get_by_email(self, email: str) -> UserRow | None:
        stmt = select(UserRow).where(UserRow.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user(self, email: str, password_hash: str, full_name: str) -> UserRow:
        # Initialized collection so later role checks do not lazy-load
        return await self.create(
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            user_roles=[],
        )

    async def assign_role(self, user: UserRow, role: RoleRow) -> None:
        if role.role_name in user.roles:
            return
        link = UserRoleRow(user_id=user.id, role_id=role.id, role=role)
        user.user_roles.append(link)
        await self.session.flush()


class RoleRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, RoleRow)

    async def get_by_name(self, role_name: str) -> RoleRow | None:
        stmt = select(RoleRow).where(RoleRow.role_name == role_name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
