# path: assetdesk/core/schemas/unit.py
from __future__ import annotations

from typing import Optional

from pydantic import Field

from assetdesk.core.schemas.common import ORMBaseSchema


class UnitCreate(ORMBaseSchema):
    name: str = Field(min_length=3, max_length=255)
    code: Optional[str] = Field(default=None, max_length=32)
    campus: Optional[str] = Field(default=None, max_length=128)


class UnitRead(ORMBaseSchema):
    id: int
    name: str
    code: Optional[str] = None
    campus: Optional[str] = None
