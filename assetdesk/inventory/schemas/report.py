# path: assetdesk/inventory/schemas/report.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from assetdesk.core.schemas.common import ORMBaseSchema
from assetdesk.inventory.enums import RequisitionStatus
from assetdesk.inventory.schemas.requisition import RequisitionLineDetail


class TechnicianTotal(BaseModel):
    technician_id: int
    technician: Optional[str] = None
    total_requisitions: int


class TopItem(BaseModel):
    item_id: int
    description: Optional[str] = None
    total_quantity: int


class GlobalStats(BaseModel):
    total_units: int
    total_users: int
    total_items: int
    pending_requisitions: int


class TechnicianRequisition(ORMBaseSchema):
    id: int
    unit_id: int
    status: RequisitionStatus
    requested_at: datetime
    sector: Optional[str] = None
    ticket_number: Optional[str] = None
    lines: list[RequisitionLineDetail] = []
