# path: assetdesk/inventory/api/api_v1/reports.py
from __future__ import annotations

from datetime import date, datetime, time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.dependencies import (
    Identity,
    get_current_identity,
    get_report_repository,
    require_capability,
)
from assetdesk.core.models import db_helper
from assetdesk.core.roles import Capability
from assetdesk.crud.report_repository import IReportRepository
from assetdesk.inventory.schemas.report import GlobalStats, TechnicianRequisition, TechnicianTotal, TopItem


router = APIRouter(tags=["reports"])


@router.get("/requisitions-by-technician", response_model=list[TechnicianTotal])
async def requisitions_by_technician(
    _: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IReportRepository, Depends(get_report_repository)],
):
    return await repo.requisitions_per_technician(session)


@router.get("/top-items", response_model=list[TopItem])
async def top_items(
    _: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IReportRepository, Depends(get_report_repository)],
):
    return await repo.top_items(session, limit=10)


@router.get("/global-stats", response_model=GlobalStats)
async def global_stats(
    _: Annotated[Identity, Depends(require_capability(Capability.VIEW_GLOBAL_STATS))],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IReportRepository, Depends(get_report_repository)],
):
    return await repo.global_stats(session)


@router.get("/technician-detail", response_model=list[TechnicianRequisition])
async def technician_detail(
    _: Annotated[Identity, Depends(require_capability(Capability.VIEW_TECHNICIAN_REPORTS))],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IReportRepository, Depends(get_report_repository)],
    technician_id: Annotated[int, Query()],
    date_from: Annotated[date, Query()],
    date_to: Annotated[date, Query()],
):
    """
    Заявки техника за период [date_from; date_to] (обе даты включительно, целыми днями).
    """
    if date_from > date_to:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="date_from must not be after date_to")
    return await repo.technician_requisitions(
        session,
        technician_id=technician_id,
        date_from=datetime.combine(date_from, time.min),
        date_to=datetime.combine(date_to, time.max),
    )
