# path: assetdesk/printers/schemas/printer.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from assetdesk.core.schemas.common import NamedRef, ORMBaseSchema, UserRef


class PrinterCreate(ORMBaseSchema):
    name: str = Field(min_length=1, max_length=255)
    serial_number: str = Field(min_length=1, max_length=128)
    ip: Optional[str] = Field(default=None, max_length=64)
    location: Optional[str] = Field(default=None, max_length=255)
    model: Optional[str] = Field(default=None, max_length=128)
    unit_id: Optional[int] = None
    policies_applied: bool = False


class PrinterUpdate(ORMBaseSchema):
    """Частичное обновление: меняются только переданные поля."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    serial_number: Optional[str] = Field(default=None, min_length=1, max_length=128)
    ip: Optional[str] = Field(default=None, max_length=64)
    location: Optional[str] = Field(default=None, max_length=255)
    model: Optional[str] = Field(default=None, max_length=128)
    unit_id: Optional[int] = None
    policies_applied: Optional[bool] = None

    @field_validator("name", "serial_number", "policies_applied")
    @classmethod
    def not_null(cls, v):
        # поле можно не передавать, но не обнулять: в БД это NOT NULL
        if v is None:
            raise ValueError("must not be null")
        return v


class PrinterRead(ORMBaseSchema):
    id: int
    name: str
    serial_number: str
    ip: Optional[str] = None
    location: Optional[str] = None
    model: Optional[str] = None
    unit_id: Optional[int] = None
    policies_applied: bool
    active: bool
    unit: Optional[NamedRef] = None


class PrinterServiceCreate(ORMBaseSchema):
    printer_id: int
    technician_id: Optional[int] = None  # по умолчанию - текущий пользователь
    unit_id: Optional[int] = None
    ticket_number: Optional[str] = Field(default=None, max_length=64)
    description: str = Field(min_length=1)


class PrinterBrief(ORMBaseSchema):
    id: int
    name: str
    serial_number: str


class PrinterServiceRead(ORMBaseSchema):
    id: int
    printer_id: int
    technician_id: int
    unit_id: Optional[int] = None
    ticket_number: Optional[str] = None
    description: str
    served_at: datetime
    printer: Optional[PrinterBrief] = None
    technician: Optional[UserRef] = None
    unit: Optional[NamedRef] = None
