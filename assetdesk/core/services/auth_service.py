# path: assetdesk/core/services/auth_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.exceptions import AuthError, NotFoundError
from assetdesk.core.models import User
from assetdesk.core.security import (
    create_access_token,
    hash_password,
    verify_and_rehash,
    verify_password,
)
from assetdesk.crud.user_repository import IUserRepository, UserRepository


log = get_logger("service.auth")


class AuthService:
    """
    Сервис авторизации.

    Важно:
    - Repo приходит через DI (или создаётся по умолчанию),
      чтобы сервис не зависел от конкретной реализации.
    - Транзакцию открывает сам сервис (async with session.begin()),
      endpoint до вызова сервиса в БД не ходит.
    """

    def __init__(self, repo: Optional[IUserRepository] = None) -> None:
        self.repo: IUserRepository = repo or UserRepository()

    @staticmethod
    def make_access_token(user: User) -> str:
        return create_access_token(
            subject=int(user.id),
            extra={
                "role": user.role.value,
                "unit_id": int(user.unit_id) if user.unit_id is not None else None,
            },
        )

    # --- Аутентификация ---
    async def authenticate(self, session: AsyncSession, *, username: str, password: str) -> tuple[str, User]:
        """
        Проверяет логин/пароль и выдаёт JWT.

        Если хэш в старой схеме (argon2) и пароль верный -
        в той же транзакции сохраняем новый хэш (bcrypt_sha256).
        """
        username_norm = (username or "").strip()

        async with session.begin():
            user = await self.repo.get_by_username(session, username=username_norm)
            if not user:
                log.info({"event": "auth_fail", "reason": "user_not_found", "username": username_norm})
                raise AuthError()

            ok, new_hash = verify_and_rehash(password, user.hashed_password)
            if not ok:
                log.info({"event": "auth_fail", "reason": "wrong_password", "username": username_norm})
                raise AuthError()

            if new_hash:
                await self.repo.set_password_hash(session, user_id=int(user.id), hashed_password=new_hash)
                log.info({"event": "password_rehashed", "user_id": int(user.id)})

        token = self.make_access_token(user)
        log.info({"event": "auth_ok", "user_id": int(user.id), "role": user.role.value})
        return token, user

    # --- Смена пароля самим пользователем ---
    async def change_password(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        current_password: str,
        new_password: str,
    ) -> None:
        async with session.begin():
            user = await self.repo.get_by_id(session, user_id=int(user_id))
            if not user:
                raise NotFoundError("User not found")

            if not verify_password(current_password, user.hashed_password):
                log.info({"event": "change_password_fail", "user_id": int(user_id)})
                raise AuthError("Current password is incorrect")

            await self.repo.set_password_hash(
                session,
                user_id=int(user_id),
                hashed_password=hash_password(new_password),
            )

        log.info({"event": "change_password_ok", "user_id": int(user_id)})

    # --- Сброс пароля администратором ---
    async def reset_password(self, session: AsyncSession, *, username: str, new_password: str) -> int:
        async with session.begin():
            user = await self.repo.get_by_username(session, username=username)
            if not user:
                raise NotFoundError("User not found")
            await self.repo.set_password_hash(
                session,
                user_id=int(user.id),
                hashed_password=hash_password(new_password),
            )

        log.info({"event": "reset_password_ok", "user_id": int(user.id)})
        return int(user.id)
