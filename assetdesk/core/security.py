# path: assetdesk/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from assetdesk.core.config import settings


# bcrypt_sha256 - текущая схема (снимает лимит 72 байта у bcrypt).
# argon2 - старая схема: такие хэши ещё проверяются, но помечены deprecated,
# и при успешном логине пароль перехэшируется в bcrypt_sha256.
pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "argon2"],
    default="bcrypt_sha256",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """Хэш пароля по текущей схеме."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Проверка пароля (любая известная схема)."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def verify_and_rehash(plain_password: str, hashed_password: Optional[str]) -> tuple[bool, Optional[str]]:
    """
    Проверка пароля с миграцией схемы.

    Возвращает (ok, new_hash):
    - new_hash != None только если пароль верный и хэш устаревшей схемы;
      вызывающий код обязан сохранить new_hash в БД.
    """
    if not hashed_password:
        return False, None
    return pwd_context.verify_and_update(plain_password, hashed_password)


def create_access_token(
    *,
    subject: int | str,
    expires_minutes: Optional[int] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    """Создаёт JWT (Bearer)."""
    to_encode: Dict[str, Any] = {"sub": str(subject)}
    if extra:
        to_encode.update(extra)
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.auth.access_token_minutes
    )
    to_encode["exp"] = int(expire.timestamp())
    return jwt.encode(to_encode, settings.auth.secret_key, algorithm=settings.auth.algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Декодирует и валидирует JWT. Бросает jose.JWTError при неверной подписи/просрочке.
    """
    payload = jwt.decode(token, settings.auth.secret_key, algorithms=[settings.auth.algorithm])
    return dict(payload)
