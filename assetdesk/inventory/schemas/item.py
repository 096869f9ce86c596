# path: assetdesk/inventory/schemas/item.py
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from assetdesk.core.schemas.common import NamedRef, ORMBaseSchema


class ItemCreate(ORMBaseSchema):
    """
    Создание / полное обновление складской позиции.
    """
    sipac_code: Optional[str] = Field(default=None, max_length=64)
    tender: Optional[str] = Field(default=None, max_length=64)
    description: str = Field(min_length=3, max_length=512)
    item_type: Optional[str] = Field(default=None, max_length=64)
    measure_unit: str = Field(min_length=1, max_length=32)
    location: Optional[str] = Field(default=None, max_length=255)
    quantity: int = Field(ge=0)
    unit_price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    unit_id: int


class ItemRead(ORMBaseSchema):
    id: int
    sipac_code: Optional[str] = None
    tender: Optional[str] = None
    description: str
    item_type: Optional[str] = None
    measure_unit: str
    location: Optional[str] = None
    quantity: int
    unit_price: Decimal
    unit_id: int
    unit: Optional[NamedRef] = None
