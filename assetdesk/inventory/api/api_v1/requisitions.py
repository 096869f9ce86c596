# path: assetdesk/inventory/api/api_v1/requisitions.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.dependencies import (
    Identity,
    get_current_identity,
    get_requisition_repository,
    get_requisition_service,
)
from assetdesk.core.exceptions import InsufficientStockError, NotFoundError, RequisitionValidationError
from assetdesk.core.models import db_helper
from assetdesk.crud.requisition_repository import IRequisitionRepository
from assetdesk.inventory.enums import RequisitionStatus
from assetdesk.inventory.schemas.requisition import (
    DeliveryStatusUpdate,
    RequisitionCreate,
    RequisitionDetail,
    RequisitionLatest,
    RequisitionLineRead,
    RequisitionListRead,
    RequisitionStatusUpdate,
)
from assetdesk.inventory.services.requisition_service import RequisitionService


router = APIRouter(tags=["requisitions"])
log = get_logger("api.requisitions")

Authenticated = Annotated[Identity, Depends(get_current_identity)]


@router.get("", response_model=list[RequisitionListRead])
async def list_requisitions(
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IRequisitionRepository, Depends(get_requisition_repository)],
    unit_id: Optional[int] = None,
    status_filter: Annotated[Optional[RequisitionStatus], Query(alias="status")] = None,
    technician_id: Optional[int] = None,
):
    return await repo.list_requisitions(
        session,
        unit_id=unit_id,
        status=status_filter,
        technician_id=technician_id,
    )


@router.post("", response_model=RequisitionDetail, status_code=status.HTTP_201_CREATED)
async def create_requisition(
    body: RequisitionCreate,
    identity: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[RequisitionService, Depends(get_requisition_service)],
):
    """
    Создать заявку на выдачу.

    - requester = текущий пользователь (из токена)
    - 400: несуществующие unit / technician / items
    - 409: не хватает остатка хотя бы по одной позиции (ничего не списывается)
    """
    try:
        return await service.create_requisition(session, requester_id=identity.user_id, payload=body)
    except RequisitionValidationError as e:
        log.info({"event": "requisition_invalid", "reason": e.message, **e.context})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid requisition data")
    except InsufficientStockError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.get("/latest", response_model=list[RequisitionLatest])
async def latest_requisitions(
    identity: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[RequisitionService, Depends(get_requisition_service)],
):
    rows = await service.latest_for(
        session,
        user_id=identity.user_id,
        role=identity.role,
        unit_id=identity.unit_id,
    )
    return [
        RequisitionLatest(
            id=int(r.id),
            requested_at=r.requested_at,
            status=r.status,
            technician_name=r.technician.full_name if r.technician is not None else "",
        )
        for r in rows
    ]


@router.get("/{requisition_id}", response_model=RequisitionDetail)
async def get_requisition(
    requisition_id: int,
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IRequisitionRepository, Depends(get_requisition_repository)],
):
    requisition = await repo.get_detail(session, requisition_id=requisition_id)
    if requisition is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Requisition not found")
    return requisition


@router.patch("/{requisition_id}/status", response_model=RequisitionDetail)
async def update_requisition_status(
    requisition_id: int,
    body: RequisitionStatusUpdate,
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[RequisitionService, Depends(get_requisition_service)],
):
    try:
        return await service.set_status(session, requisition_id=requisition_id, status=body.status)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Requisition not found")


@router.patch("/lines/{line_id}/status", response_model=RequisitionLineRead)
async def update_line_delivery(
    line_id: int,
    body: DeliveryStatusUpdate,
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[RequisitionService, Depends(get_requisition_service)],
):
    try:
        return await service.set_line_delivery(session, line_id=line_id, delivery_status=body.delivery_status)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Requisition line not found")
