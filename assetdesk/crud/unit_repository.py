# path: assetdesk/crud/unit_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.models import Unit


class IUnitRepository(Protocol):
    async def get_by_id(self, session: AsyncSession, *, unit_id: int) -> Optional[Unit]: ...
    async def list_units(self, session: AsyncSession) -> Sequence[Unit]: ...
    async def create_unit(self, session: AsyncSession, **fields: Any) -> Unit: ...
    async def update_unit(self, session: AsyncSession, *, unit: Unit, **fields: Any) -> Unit: ...
    async def delete_unit(self, session: AsyncSession, *, unit: Unit) -> None: ...


class UnitRepository(IUnitRepository):
    async def get_by_id(self, session: AsyncSession, *, unit_id: int) -> Optional[Unit]:
        return await session.get(Unit, int(unit_id))

    async def list_units(self, session: AsyncSession) -> Sequence[Unit]:
        res = await session.execute(select(Unit).order_by(Unit.name.asc()))
        return list(res.scalars())

    async def create_unit(self, session: AsyncSession, **fields: Any) -> Unit:
        unit = Unit(**fields)
        session.add(unit)
        await session.flush()
        return unit

    async def update_unit(self, session: AsyncSession, *, unit: Unit, **fields: Any) -> Unit:
        for key, value in fields.items():
            setattr(unit, key, value)
        await session.flush()
        return unit

    async def delete_unit(self, session: AsyncSession, *, unit: Unit) -> None:
        await session.delete(unit)
        await session.flush()
