# path: assetdesk/core/schemas/common.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ORMBaseSchema(BaseModel):
    """
    Базовая схема для ответов из ORM (pydantic v2).
    """
    model_config = ConfigDict(from_attributes=True)


class NamedRef(ORMBaseSchema):
    """Короткая ссылка на связанную запись: {id, name} (unit и т.п.)."""
    id: int
    name: str


class UserRef(ORMBaseSchema):
    id: int
    full_name: str


class MessageOut(BaseModel):
    message: str
