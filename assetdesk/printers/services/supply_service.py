# path: assetdesk/printers/services/supply_service.py
from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.exceptions import InsufficientSupplyError, SupplyValidationError
from assetdesk.crud.printer_repository import IPrinterRepository, PrinterRepository
from assetdesk.crud.supply_repository import ISupplyRepository, SupplyRepository
from assetdesk.crud.unit_repository import IUnitRepository, UnitRepository
from assetdesk.printers.models import SUPPLY_COUNTERS, SupplyConsumption, SupplyStock
from assetdesk.printers.schemas.supply import SupplyConsumptionCreate, SupplyRestock


log = get_logger("printers.supply_service")


class SupplyStockService:
    """
    Агрегат "остатки расходников".

    Важно:
    - строка supply_stock одна (id=1), создаётся лениво при первом обращении;
    - любое изменение счётчиков идёт в транзакции под FOR UPDATE;
    - списание сначала проверяет ВСЕ счётчики, потом уменьшает -
      в минус остаток не уходит.
    """

    def __init__(
        self,
        repo: Optional[ISupplyRepository] = None,
        printer_repo: Optional[IPrinterRepository] = None,
        unit_repo: Optional[IUnitRepository] = None,
    ) -> None:
        self._repo: ISupplyRepository = repo or SupplyRepository()
        self._printers: IPrinterRepository = printer_repo or PrinterRepository()
        self._units: IUnitRepository = unit_repo or UnitRepository()

    async def _get_or_create_locked(self, session: AsyncSession) -> SupplyStock:
        stock = await self._repo.get_stock(session, for_update=True)
        if stock is None:
            stock = await self._repo.create_stock(session)
        return stock

    async def get_stock(self, session: AsyncSession) -> SupplyStock:
        async with session.begin():
            stock = await self._repo.get_stock(session)
            if stock is None:
                stock = await self._repo.create_stock(session)
        return stock

    async def restock(self, session: AsyncSession, *, amounts: SupplyRestock) -> SupplyStock:
        async with session.begin():
            stock = await self._get_or_create_locked(session)
            for name in SUPPLY_COUNTERS:
                column = f"{name}_total"
                setattr(stock, column, int(getattr(stock, column)) + int(getattr(amounts, column)))
            await session.flush()

        log.info({"event": "supply_restock", **amounts.model_dump()})
        return stock

    async def consume(
        self,
        session: AsyncSession,
        *,
        technician_id: int,
        payload: SupplyConsumptionCreate,
    ) -> SupplyConsumption:
        async with session.begin():
            if payload.printer_id is not None:
                if await self._printers.get_by_id(session, printer_id=payload.printer_id) is None:
                    raise SupplyValidationError("Unknown printer", printer_id=payload.printer_id)
            if payload.unit_id is not None:
                if await self._units.get_by_id(session, unit_id=payload.unit_id) is None:
                    raise SupplyValidationError("Unknown unit", unit_id=payload.unit_id)

            stock = await self._get_or_create_locked(session)

            shortages: dict[str, tuple[int, int]] = {}
            for name in SUPPLY_COUNTERS:
                requested = int(getattr(payload, f"{name}_requested"))
                available = int(getattr(stock, f"{name}_total"))
                if requested > available:
                    shortages[name] = (requested, available)
            if shortages:
                log.info({"event": "supply_consume_rejected", "shortages": shortages})
                raise InsufficientSupplyError(shortages=shortages)

            for name in SUPPLY_COUNTERS:
                column = f"{name}_total"
                setattr(stock, column, int(getattr(stock, column)) - int(getattr(payload, f"{name}_requested")))

            record = await self._repo.create_consumption(
                session,
                technician_id=int(technician_id),
                **payload.model_dump(),
            )
            await session.refresh(record, attribute_names=["consumed_at", "technician"])

        log.info({"event": "supply_consumed", "consumption_id": int(record.id), "technician_id": int(technician_id)})
        return record

    async def list_consumptions(self, session: AsyncSession) -> Sequence[SupplyConsumption]:
        return await self._repo.list_consumptions(session)
