# path: assetdesk/core/models/base.py
from __future__ import annotations

from enum import Enum as PyEnum
from typing import Type

from sqlalchemy import Enum as SAEnum, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from assetdesk.core.config import settings


class Base(DeclarativeBase):
    __abstract__ = True

    metadata = MetaData(naming_convention=settings.db.naming_convention)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)


def str_enum(enum_cls: Type[PyEnum], name: str) -> SAEnum:
    """
    Enum-колонка, которая хранит .value (а не имя члена) как VARCHAR.

    native_enum=False - чтобы схема одинаково жила в Postgres и в sqlite (тесты).
    """
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda e: [m.value for m in e],
        validate_strings=True,
    )
