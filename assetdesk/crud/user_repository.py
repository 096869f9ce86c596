# path: assetdesk/crud/user_repository.py
from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.app_logging import get_logger
from assetdesk.core.models import User
from assetdesk.core.roles import Role


log = get_logger("repo.user")


class IUserRepository(Protocol):
    async def get_by_id(self, session: AsyncSession, *, user_id: int) -> Optional[User]: ...
    async def get_by_username(self, session: AsyncSession, *, username: str) -> Optional[User]: ...

    async def list_users(
        self,
        session: AsyncSession,
        *,
        roles: Optional[Iterable[Role]] = None,
        unit_id: Optional[int] = None,
    ) -> Sequence[User]: ...

    async def create_user(self, session: AsyncSession, *, hashed_password: str, **fields: Any) -> User: ...
    async def update_user_fields(self, session: AsyncSession, *, user_id: int, **fields: Any) -> None: ...
    async def set_password_hash(self, session: AsyncSession, *, user_id: int, hashed_password: str) -> None: ...
    async def delete_user(self, session: AsyncSession, *, user: User) -> None: ...


class UserRepository(IUserRepository):
    """
    Репозиторий пользователей.

    Правило проекта:
    - Все обращения к БД через SQLAlchemy - только здесь (assetdesk/crud/).
    - commit делает вызывающий код (сервис / endpoint), репозиторий только flush.
    """

    async def get_by_id(self, session: AsyncSession, *, user_id: int) -> Optional[User]:
        stmt = (
            select(User)
            .where(User.id == int(user_id))
            .options(selectinload(User.unit))
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def get_by_username(self, session: AsyncSession, *, username: str) -> Optional[User]:
        username = (username or "").strip()
        if not username:
            return None
        res = await session.execute(select(User).where(User.username == username))
        return res.scalar_one_or_none()

    async def list_users(
        self,
        session: AsyncSession,
        *,
        roles: Optional[Iterable[Role]] = None,
        unit_id: Optional[int] = None,
    ) -> Sequence[User]:
        stmt = select(User).options(selectinload(User.unit)).order_by(User.full_name.asc())
        if roles is not None:
            stmt = stmt.where(User.role.in_(list(roles)))
        if unit_id is not None:
            stmt = stmt.where(User.unit_id == int(unit_id))
        res = await session.execute(stmt)
        return list(res.scalars())

    async def create_user(self, session: AsyncSession, *, hashed_password: str, **fields: Any) -> User:
        log.info({"event": "create_user_start", "username": fields.get("username")})

        user = User(hashed_password=hashed_password, **fields)
        session.add(user)
        await session.flush()

        log.info({"event": "create_user_done", "user_id": user.id})
        return user

    async def update_user_fields(self, session: AsyncSession, *, user_id: int, **fields: Any) -> None:
        if not fields:
            return
        await session.execute(update(User).where(User.id == int(user_id)).values(**fields))

    async def set_password_hash(self, session: AsyncSession, *, user_id: int, hashed_password: str) -> None:
        await session.execute(
            update(User)
            .where(User.id == int(user_id))
            .values(hashed_password=hashed_password)
        )

    async def delete_user(self, session: AsyncSession, *, user: User) -> None:
        await session.delete(user)
        await session.flush()
