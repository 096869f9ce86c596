# path: assetdesk/printers/schemas/supply.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from assetdesk.core.schemas.common import ORMBaseSchema, UserRef


class SupplyStockRead(ORMBaseSchema):
    imaging_unit_total: int
    black_toner_total: int
    cyan_toner_total: int
    magenta_toner_total: int
    yellow_toner_total: int


class SupplyRestock(ORMBaseSchema):
    """Сколько добавить к остаткам (только неотрицательные значения)."""
    imaging_unit_total: int = Field(default=0, ge=0)
    black_toner_total: int = Field(default=0, ge=0)
    cyan_toner_total: int = Field(default=0, ge=0)
    magenta_toner_total: int = Field(default=0, ge=0)
    yellow_toner_total: int = Field(default=0, ge=0)


class SupplyConsumptionCreate(ORMBaseSchema):
    printer_id: Optional[int] = None
    unit_id: Optional[int] = None
    ticket_number: Optional[str] = Field(default=None, max_length=64)
    imaging_unit_requested: int = Field(default=0, ge=0)
    black_toner_requested: int = Field(default=0, ge=0)
    cyan_toner_requested: int = Field(default=0, ge=0)
    magenta_toner_requested: int = Field(default=0, ge=0)
    yellow_toner_requested: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class SupplyConsumptionRead(ORMBaseSchema):
    id: int
    printer_id: Optional[int] = None
    technician_id: int
    unit_id: Optional[int] = None
    ticket_number: Optional[str] = None
    imaging_unit_requested: int
    black_toner_requested: int
    cyan_toner_requested: int
    magenta_toner_requested: int
    yellow_toner_requested: int
    notes: Optional[str] = None
    consumed_at: datetime
    technician: Optional[UserRef] = None
