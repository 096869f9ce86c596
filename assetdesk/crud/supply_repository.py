# path: assetdesk/crud/supply_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.app_logging import get_logger
from assetdesk.printers.models import SUPPLY_STOCK_ID, SupplyConsumption, SupplyStock


log = get_logger("repo.supply")


class ISupplyRepository(Protocol):
    async def get_stock(self, session: AsyncSession, *, for_update: bool = False) -> Optional[SupplyStock]: ...
    async def create_stock(self, session: AsyncSession) -> SupplyStock: ...
    async def create_consumption(self, session: AsyncSession, **fields: Any) -> SupplyConsumption: ...
    async def list_consumptions(self, session: AsyncSession) -> Sequence[SupplyConsumption]: ...


class SupplyRepository(ISupplyRepository):
    """
    Репозиторий остатков расходников (singleton-строка) и журнала их выдачи.
    """

    async def get_stock(self, session: AsyncSession, *, for_update: bool = False) -> Optional[SupplyStock]:
        stmt = select(SupplyStock).where(SupplyStock.id == SUPPLY_STOCK_ID)
        if for_update:
            stmt = stmt.with_for_update()
        # populate_existing: внутри транзакции перечитываем строку, а не берём из identity map
        stmt = stmt.execution_options(populate_existing=True)
        return (await session.execute(stmt)).scalar_one_or_none()

    async def create_stock(self, session: AsyncSession) -> SupplyStock:
        stock = SupplyStock(
            id=SUPPLY_STOCK_ID,
            imaging_unit_total=0,
            black_toner_total=0,
            cyan_toner_total=0,
            magenta_toner_total=0,
            yellow_toner_total=0,
        )
        session.add(stock)
        await session.flush()
        log.info({"event": "supply_stock_created", "id": SUPPLY_STOCK_ID})
        return stock

    async def create_consumption(self, session: AsyncSession, **fields: Any) -> SupplyConsumption:
        record = SupplyConsumption(**fields)
        session.add(record)
        await session.flush()
        return record

    async def list_consumptions(self, session: AsyncSession) -> Sequence[SupplyConsumption]:
        stmt = (
            select(SupplyConsumption)
            .options(selectinload(SupplyConsumption.technician))
            .order_by(SupplyConsumption.consumed_at.desc(), SupplyConsumption.id.desc())
        )
        res = await session.execute(stmt)
        return list(res.scalars())
