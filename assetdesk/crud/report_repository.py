# path: assetdesk/crud/report_repository.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.core.models import Unit, User
from assetdesk.inventory.enums import RequisitionStatus
from assetdesk.inventory.models import Item, Requisition, RequisitionLine


class IReportRepository(Protocol):
    async def requisitions_per_technician(self, session: AsyncSession) -> list[dict[str, Any]]: ...
    async def top_items(self, session: AsyncSession, *, limit: int = 10) -> list[dict[str, Any]]: ...
    async def global_stats(self, session: AsyncSession) -> dict[str, int]: ...
    async def technician_requisitions(
        self,
        session: AsyncSession,
        *,
        technician_id: int,
        date_from: datetime,
        date_to: datetime,
    ) -> Sequence[Requisition]: ...


class ReportRepository(IReportRepository):
    """
    Агрегаты для отчётов. Только чтение.
    """

    async def requisitions_per_technician(self, session: AsyncSession) -> list[dict[str, Any]]:
        total = func.count(Requisition.id).label("total")
        stmt = (
            select(User.id, User.full_name, total)
            .join(Requisition, Requisition.technician_id == User.id)
            .group_by(User.id, User.full_name)
            .order_by(total.desc(), User.full_name.asc())
        )
        rows = (await session.execute(stmt)).all()
        return [
            {"technician_id": int(uid), "technician": name, "total_requisitions": int(cnt)}
            for uid, name, cnt in rows
        ]

    async def top_items(self, session: AsyncSession, *, limit: int = 10) -> list[dict[str, Any]]:
        total = func.sum(RequisitionLine.quantity_requested).label("total")
        stmt = (
            select(Item.id, Item.description, total)
            .join(RequisitionLine, RequisitionLine.item_id == Item.id)
            .group_by(Item.id, Item.description)
            .order_by(total.desc(), Item.id.asc())
            .limit(int(limit))
        )
        rows = (await session.execute(stmt)).all()
        return [
            {"item_id": int(iid), "description": desc, "total_quantity": int(qty or 0)}
            for iid, desc, qty in rows
        ]

    async def global_stats(self, session: AsyncSession) -> dict[str, int]:
        total_units = (await session.execute(select(func.count(Unit.id)))).scalar_one()
        total_users = (await session.execute(select(func.count(User.id)))).scalar_one()
        total_items = (await session.execute(select(func.coalesce(func.sum(Item.quantity), 0)))).scalar_one()
        pending = (
            await session.execute(
                select(func.count(Requisition.id)).where(Requisition.status == RequisitionStatus.PENDING)
            )
        ).scalar_one()
        return {
            "total_units": int(total_units),
            "total_users": int(total_users),
            "total_items": int(total_items or 0),
            "pending_requisitions": int(pending),
        }

    async def technician_requisitions(
        self,
        session: AsyncSession,
        *,
        technician_id: int,
        date_from: datetime,
        date_to: datetime,
    ) -> Sequence[Requisition]:
        stmt = (
            select(Requisition)
            .where(Requisition.technician_id == int(technician_id))
            .where(Requisition.requested_at >= date_from)
            .where(Requisition.requested_at <= date_to)
            .options(selectinload(Requisition.lines).selectinload(RequisitionLine.item))
            .order_by(Requisition.requested_at.desc(), Requisition.id.desc())
        )
        res = await session.execute(stmt)
        return list(res.scalars())
