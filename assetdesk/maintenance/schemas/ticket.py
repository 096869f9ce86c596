# path: assetdesk/maintenance/schemas/ticket.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from assetdesk.core.schemas.common import ORMBaseSchema, UserRef
from assetdesk.maintenance.enums import TicketStatus


class TicketCreate(ORMBaseSchema):
    ticket_number: Optional[str] = Field(default=None, max_length=64)
    technician_id: Optional[int] = None  # по умолчанию - текущий пользователь
    equipment: str = Field(min_length=1, max_length=255)
    problem_description: str = Field(min_length=1)


class TicketStatusUpdate(ORMBaseSchema):
    status: TicketStatus


class TicketFinish(ORMBaseSchema):
    technical_report: str = Field(min_length=1)


class TicketRead(ORMBaseSchema):
    id: int
    ticket_number: Optional[str] = None
    technician_id: int
    equipment: str
    problem_description: str
    status: TicketStatus
    technical_report: Optional[str] = None
    received_at: datetime
    technician: Optional[UserRef] = None
