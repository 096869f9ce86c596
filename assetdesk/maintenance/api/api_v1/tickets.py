# path: assetdesk/maintenance/api/api_v1/tickets.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.dependencies import (
    Identity,
    get_current_identity,
    get_maintenance_repository,
    get_user_repository,
    require_capability,
)
from assetdesk.core.models import db_helper
from assetdesk.core.roles import Capability
from assetdesk.crud.maintenance_repository import IMaintenanceRepository
from assetdesk.crud.user_repository import IUserRepository
from assetdesk.maintenance.enums import TicketStatus
from assetdesk.maintenance.schemas.ticket import TicketCreate, TicketFinish, TicketRead, TicketStatusUpdate


router = APIRouter(tags=["maintenance"])
log = get_logger("api.maintenance")

Worker = Annotated[Identity, Depends(require_capability(Capability.WORK_MAINTENANCE))]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Maintenance ticket not found")


@router.get("", response_model=list[TicketRead])
async def list_tickets(
    _: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IMaintenanceRepository, Depends(get_maintenance_repository)],
):
    return await repo.list_queue(session)


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    body: TicketCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IMaintenanceRepository, Depends(get_maintenance_repository)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
):
    technician_id = body.technician_id if body.technician_id is not None else identity.user_id
    async with session.begin():
        if await user_repo.get_by_id(session, user_id=technician_id) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown technician")
        ticket = await repo.create_ticket(
            session,
            ticket_number=body.ticket_number,
            technician_id=technician_id,
            equipment=body.equipment,
            problem_description=body.problem_description,
            status=TicketStatus.PENDING,
        )
        ticket = await repo.get_by_id(session, ticket_id=int(ticket.id))

    log.info({"event": "ticket_created", "ticket_id": int(ticket.id), "by": identity.user_id})
    return ticket


@router.patch("/{ticket_id}/status", response_model=TicketRead)
async def update_ticket_status(
    ticket_id: int,
    body: TicketStatusUpdate,
    _: Worker,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IMaintenanceRepository, Depends(get_maintenance_repository)],
):
    async with session.begin():
        ticket = await repo.get_by_id(session, ticket_id=ticket_id)
        if ticket is None:
            raise _not_found()
        await repo.update_ticket(session, ticket=ticket, status=body.status)
    return ticket


@router.patch("/{ticket_id}/start", response_model=TicketRead)
async def start_ticket(
    ticket_id: int,
    identity: Worker,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IMaintenanceRepository, Depends(get_maintenance_repository)],
):
    """Взять заявку в работу: ответственным становится текущий пользователь."""
    async with session.begin():
        ticket = await repo.get_by_id(session, ticket_id=ticket_id)
        if ticket is None:
            raise _not_found()
        await repo.update_ticket(
            session,
            ticket=ticket,
            technician_id=identity.user_id,
            status=TicketStatus.IN_PROGRESS,
        )
        ticket = await repo.get_by_id(session, ticket_id=ticket_id)

    log.info({"event": "ticket_started", "ticket_id": ticket_id, "technician_id": identity.user_id})
    return ticket


@router.patch("/{ticket_id}/finish", response_model=TicketRead)
async def finish_ticket(
    ticket_id: int,
    body: TicketFinish,
    identity: Worker,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IMaintenanceRepository, Depends(get_maintenance_repository)],
):
    report = body.technical_report.strip()
    if not report:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Technical report is required")

    async with session.begin():
        ticket = await repo.get_by_id(session, ticket_id=ticket_id)
        if ticket is None:
            raise _not_found()
        await repo.update_ticket(session, ticket=ticket, technical_report=report, status=TicketStatus.DONE)

    log.info({"event": "ticket_finished", "ticket_id": ticket_id, "technician_id": identity.user_id})
    return ticket
