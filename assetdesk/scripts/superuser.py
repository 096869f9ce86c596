# /assetdesk/scripts/superuser.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.models import User
from assetdesk.core.roles import Role
from assetdesk.core.security import hash_password

log = get_logger("scripts.superuser")


async def create_admin(
    session: AsyncSession,
    *,
    username: str,
    password: str,
    full_name: Optional[str] = None,
    email: Optional[str] = None,
) -> int:
    """
    Создаёт первого администратора:
    - role = admin, без подразделения
    - пароль хэшируется текущей схемой
    Возвращает user.id
    """
    username = (username or "").strip()
    if not username:
        raise ValueError("username is required")
    if len(password or "") < 6:
        raise ValueError("password must be at least 6 characters")

    email_final = (email or "").strip().lower() or None

    # Проверка уникальности username / email
    stmt = select(User).where(User.username == username)
    if email_final:
        stmt = select(User).where((User.username == username) | (User.email == email_final))
    if (await session.execute(stmt)).scalars().first() is not None:
        raise ValueError("User with same username or email already exists")

    user = User(
        username=username,
        full_name=(full_name or "").strip() or username,
        role=Role.ADMIN,
        email=email_final,
        hashed_password=hash_password(password),
    )
    session.add(user)
    await session.flush()  # получим user.id

    log.info({"event": "create_admin", "user_id": user.id, "username": username})
    return int(user.id)
