# path: assetdesk/core/models/user.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetdesk.core.roles import Role

from .base import Base, str_enum


class User(Base):
    """
    Пользователь системы.

    hashed_password может быть в старой схеме (argon2) -
    при первом успешном логине перехэшируется (см. AuthService.authenticate).
    """
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(str_enum(Role, "user_role"), nullable=False)

    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)

    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    unit_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("units.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    unit: Mapped[Optional["Unit"]] = relationship("Unit")
