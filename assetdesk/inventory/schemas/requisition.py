# path: assetdesk/inventory/schemas/requisition.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from assetdesk.core.schemas.common import ORMBaseSchema, UserRef
from assetdesk.inventory.enums import DeliveryStatus, RequisitionStatus


class RequisitionLineIn(ORMBaseSchema):
    item_id: int
    quantity: int = Field(gt=0)


class RequisitionCreate(ORMBaseSchema):
    """
    Заявка на выдачу. requester берётся из токена, не из тела.
    """
    technician_id: int
    unit_id: int
    sector: Optional[str] = Field(default=None, max_length=255)
    ticket_number: Optional[str] = Field(default=None, max_length=64)
    asset_tag: Optional[str] = Field(default=None, max_length=64)
    lines: list[RequisitionLineIn] = Field(min_length=1)


class RequisitionStatusUpdate(ORMBaseSchema):
    status: RequisitionStatus


class DeliveryStatusUpdate(ORMBaseSchema):
    delivery_status: DeliveryStatus


class ItemBrief(ORMBaseSchema):
    id: int
    description: str
    measure_unit: Optional[str] = None


class RequisitionLineRead(ORMBaseSchema):
    id: int
    requisition_id: int
    item_id: int
    quantity_requested: int
    delivery_status: DeliveryStatus
    delivered_at: Optional[datetime] = None


class RequisitionLineDetail(RequisitionLineRead):
    item: Optional[ItemBrief] = None


class RequisitionRead(ORMBaseSchema):
    id: int
    requester_id: int
    technician_id: int
    unit_id: int
    sector: Optional[str] = None
    ticket_number: Optional[str] = None
    asset_tag: Optional[str] = None
    status: RequisitionStatus
    requested_at: datetime


class RequisitionListRead(RequisitionRead):
    technician: Optional[UserRef] = None


class RequisitionDetail(RequisitionRead):
    requester: Optional[UserRef] = None
    technician: Optional[UserRef] = None
    lines: list[RequisitionLineDetail] = []


class RequisitionLatest(ORMBaseSchema):
    id: int
    requested_at: datetime
    status: RequisitionStatus
    technician_name: str
