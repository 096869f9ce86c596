# path: assetdesk/core/schemas/user.py
from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from assetdesk.core.roles import Role
from assetdesk.core.schemas.common import NamedRef, ORMBaseSchema


class UserBase(ORMBaseSchema):
    full_name: str = Field(min_length=3, max_length=255)
    role: Role
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[EmailStr] = None
    unit_id: Optional[int] = None


class UserCreate(UserBase):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6)


class UserUpdate(UserBase):
    """Пароль здесь не меняется - только через reset-password / change-password."""


class UserRead(ORMBaseSchema):
    id: int
    username: str
    full_name: str
    role: Role
    phone: Optional[str] = None
    email: Optional[str] = None
    unit_id: Optional[int] = None
    unit: Optional[NamedRef] = None


class PasswordReset(ORMBaseSchema):
    username: str = Field(min_length=1)
    new_password: str = Field(min_length=6)
