# path: assetdesk/inventory/services/requisition_service.py
from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    RequisitionValidationError,
)
from assetdesk.core.roles import Role
from assetdesk.crud.item_repository import IItemRepository, ItemRepository
from assetdesk.crud.requisition_repository import IRequisitionRepository, RequisitionRepository
from assetdesk.crud.unit_repository import IUnitRepository, UnitRepository
from assetdesk.crud.user_repository import IUserRepository, UserRepository
from assetdesk.inventory.enums import DeliveryStatus, RequisitionStatus
from assetdesk.inventory.models import Requisition, RequisitionLine
from assetdesk.inventory.schemas.requisition import RequisitionCreate


log = get_logger("inventory.requisition_service")

LATEST_LIMIT = 5


class RequisitionService:
    """
    Сервис заявок на выдачу со склада.

    Главное - create_requisition: одна транзакция, которая
      1) проверяет ссылки (unit, requester, technician, items),
      2) под FOR UPDATE проверяет остатки по всем items,
      3) списывает остатки,
      4) создаёт заявку и строки.
    Любая ошибка -> rollback всего блока, частичной заявки не бывает.
    """

    def __init__(
        self,
        requisition_repo: Optional[IRequisitionRepository] = None,
        item_repo: Optional[IItemRepository] = None,
        unit_repo: Optional[IUnitRepository] = None,
        user_repo: Optional[IUserRepository] = None,
    ) -> None:
        self._requisitions: IRequisitionRepository = requisition_repo or RequisitionRepository()
        self._items: IItemRepository = item_repo or ItemRepository()
        self._units: IUnitRepository = unit_repo or UnitRepository()
        self._users: IUserRepository = user_repo or UserRepository()

    @staticmethod
    def aggregate_lines(payload: RequisitionCreate) -> "OrderedDict[int, int]":
        """item_id -> суммарное количество (повторы одного item в заявке складываются)."""
        totals: "OrderedDict[int, int]" = OrderedDict()
        for line in payload.lines:
            totals[int(line.item_id)] = totals.get(int(line.item_id), 0) + int(line.quantity)
        return totals

    async def create_requisition(
        self,
        session: AsyncSession,
        *,
        requester_id: int,
        payload: RequisitionCreate,
    ) -> Requisition:
        totals = self.aggregate_lines(payload)

        async with session.begin():
            if await self._units.get_by_id(session, unit_id=payload.unit_id) is None:
                raise RequisitionValidationError("Unknown unit", unit_id=payload.unit_id)
            if await self._users.get_by_id(session, user_id=requester_id) is None:
                raise RequisitionValidationError("Unknown requester", user_id=requester_id)
            if await self._users.get_by_id(session, user_id=payload.technician_id) is None:
                raise RequisitionValidationError("Unknown technician", user_id=payload.technician_id)

            items = await self._items.lock_items(session, totals.keys())

            missing = [item_id for item_id in totals if item_id not in items]
            if missing:
                raise RequisitionValidationError("Unknown items", item_ids=missing)

            # сначала проверяем ВСЁ, потом списываем
            for item_id, requested in totals.items():
                available = int(items[item_id].quantity)
                if available < requested:
                    log.info(
                        {
                            "event": "requisition_rejected",
                            "reason": "insufficient_stock",
                            "item_id": item_id,
                            "requested": requested,
                            "available": available,
                        }
                    )
                    raise InsufficientStockError(item_id=item_id, requested=requested, available=available)

            for item_id, requested in totals.items():
                items[item_id].quantity = int(items[item_id].quantity) - requested

            requisition = await self._requisitions.create_header(
                session,
                requester_id=int(requester_id),
                technician_id=int(payload.technician_id),
                unit_id=int(payload.unit_id),
                sector=payload.sector,
                ticket_number=payload.ticket_number,
                asset_tag=payload.asset_tag,
                status=RequisitionStatus.PENDING,
            )

            for line in payload.lines:
                await self._requisitions.add_line(
                    session,
                    requisition_id=int(requisition.id),
                    item_id=int(line.item_id),
                    quantity_requested=int(line.quantity),
                )

            detail = await self._requisitions.get_detail(session, requisition_id=int(requisition.id))

        log.info(
            {
                "event": "requisition_created",
                "requisition_id": int(requisition.id),
                "requester_id": int(requester_id),
                "lines": len(payload.lines),
            }
        )
        return detail

    async def latest_for(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        role: Role,
        unit_id: Optional[int],
    ) -> Sequence[Requisition]:
        """
        Последние заявки с учётом роли:
        - manager   -> заявки своего подразделения
        - техники   -> заявки, где он ответственный
        - admin     -> все
        """
        if role == Role.MANAGER:
            if unit_id is None:
                return []
            return await self._requisitions.list_requisitions(session, unit_id=unit_id, limit=LATEST_LIMIT)
        if role.is_technician:
            return await self._requisitions.list_requisitions(session, technician_id=user_id, limit=LATEST_LIMIT)
        return await self._requisitions.list_requisitions(session, limit=LATEST_LIMIT)

    async def set_status(
        self,
        session: AsyncSession,
        *,
        requisition_id: int,
        status: RequisitionStatus,
    ) -> Requisition:
        async with session.begin():
            requisition = await self._requisitions.get_by_id(session, requisition_id=requisition_id)
            if requisition is None:
                raise NotFoundError("Requisition not found")
            requisition.status = status
            await session.flush()
            detail = await self._requisitions.get_detail(session, requisition_id=requisition_id)

        log.info({"event": "requisition_status", "requisition_id": int(requisition_id), "status": status.value})
        return detail

    async def set_line_delivery(
        self,
        session: AsyncSession,
        *,
        line_id: int,
        delivery_status: DeliveryStatus,
    ) -> RequisitionLine:
        async with session.begin():
            line = await self._requisitions.get_line(session, line_id=line_id)
            if line is None:
                raise NotFoundError("Requisition line not found")
            line.delivery_status = delivery_status
            line.delivered_at = (
                datetime.now(timezone.utc) if delivery_status == DeliveryStatus.DELIVERED else None
            )
            await session.flush()

        log.info({"event": "requisition_line_delivery", "line_id": int(line_id), "status": delivery_status.value})
        return line
