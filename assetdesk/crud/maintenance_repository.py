# path: assetdesk/crud/maintenance_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.maintenance.models import MaintenanceTicket


class IMaintenanceRepository(Protocol):
    async def get_by_id(self, session: AsyncSession, *, ticket_id: int) -> Optional[MaintenanceTicket]: ...
    async def list_queue(self, session: AsyncSession) -> Sequence[MaintenanceTicket]: ...
    async def create_ticket(self, session: AsyncSession, **fields: Any) -> MaintenanceTicket: ...
    async def update_ticket(self, session: AsyncSession, *, ticket: MaintenanceTicket, **fields: Any) -> MaintenanceTicket: ...


class MaintenanceRepository(IMaintenanceRepository):
    async def get_by_id(self, session: AsyncSession, *, ticket_id: int) -> Optional[MaintenanceTicket]:
        stmt = (
            select(MaintenanceTicket)
            .where(MaintenanceTicket.id == int(ticket_id))
            .options(selectinload(MaintenanceTicket.technician))
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def list_queue(self, session: AsyncSession) -> Sequence[MaintenanceTicket]:
        # очередь: сначала самые старые
        stmt = (
            select(MaintenanceTicket)
            .options(selectinload(MaintenanceTicket.technician))
            .order_by(MaintenanceTicket.received_at.asc(), MaintenanceTicket.id.asc())
        )
        res = await session.execute(stmt)
        return list(res.scalars())

    async def create_ticket(self, session: AsyncSession, **fields: Any) -> MaintenanceTicket:
        ticket = MaintenanceTicket(**fields)
        session.add(ticket)
        await session.flush()
        return ticket

    async def update_ticket(self, session: AsyncSession, *, ticket: MaintenanceTicket, **fields: Any) -> MaintenanceTicket:
        for key, value in fields.items():
            setattr(ticket, key, value)
        await session.flush()
        return ticket
