# path: assetdesk/crud/requisition_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.inventory.enums import RequisitionStatus
from assetdesk.inventory.models import Requisition, RequisitionLine


class IRequisitionRepository(Protocol):
    async def create_header(self, session: AsyncSession, **fields: Any) -> Requisition: ...
    async def add_line(
        self,
        session: AsyncSession,
        *,
        requisition_id: int,
        item_id: int,
        quantity_requested: int,
    ) -> RequisitionLine: ...

    async def get_by_id(self, session: AsyncSession, *, requisition_id: int) -> Optional[Requisition]: ...
    async def get_detail(self, session: AsyncSession, *, requisition_id: int) -> Optional[Requisition]: ...

    async def list_requisitions(
        self,
        session: AsyncSession,
        *,
        unit_id: Optional[int] = None,
        status: Optional[RequisitionStatus] = None,
        technician_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Requisition]: ...

    async def get_line(self, session: AsyncSession, *, line_id: int) -> Optional[RequisitionLine]: ...


class RequisitionRepository(IRequisitionRepository):
    """
    Репозиторий заявок и строк заявок.

    Важно:
    - Создание заявки целиком (с проверкой и списанием остатков) - в RequisitionService,
      здесь только отдельные INSERT/SELECT.
    """

    async def create_header(self, session: AsyncSession, **fields: Any) -> Requisition:
        req = Requisition(**fields)
        session.add(req)
        await session.flush()
        return req

    async def add_line(
        self,
        session: AsyncSession,
        *,
        requisition_id: int,
        item_id: int,
        quantity_requested: int,
    ) -> RequisitionLine:
        line = RequisitionLine(
            requisition_id=int(requisition_id),
            item_id=int(item_id),
            quantity_requested=int(quantity_requested),
        )
        session.add(line)
        await session.flush()
        return line

    async def get_by_id(self, session: AsyncSession, *, requisition_id: int) -> Optional[Requisition]:
        return await session.get(Requisition, int(requisition_id))

    async def get_detail(self, session: AsyncSession, *, requisition_id: int) -> Optional[Requisition]:
        stmt = (
            select(Requisition)
            .where(Requisition.id == int(requisition_id))
            .options(
                selectinload(Requisition.requester),
                selectinload(Requisition.technician),
                selectinload(Requisition.lines).selectinload(RequisitionLine.item),
            )
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def list_requisitions(
        self,
        session: AsyncSession,
        *,
        unit_id: Optional[int] = None,
        status: Optional[RequisitionStatus] = None,
        technician_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Requisition]:
        stmt = (
            select(Requisition)
            .options(selectinload(Requisition.technician))
            .order_by(Requisition.requested_at.desc(), Requisition.id.desc())
        )
        if unit_id is not None:
            stmt = stmt.where(Requisition.unit_id == int(unit_id))
        if status is not None:
            stmt = stmt.where(Requisition.status == status)
        if technician_id is not None:
            stmt = stmt.where(Requisition.technician_id == int(technician_id))
        if limit is not None:
            stmt = stmt.limit(int(limit))
        res = await session.execute(stmt)
        return list(res.scalars())

    async def get_line(self, session: AsyncSession, *, line_id: int) -> Optional[RequisitionLine]:
        return await session.get(RequisitionLine, int(line_id))
