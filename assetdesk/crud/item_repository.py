# path: assetdesk/crud/item_repository.py
from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.app_logging import get_logger
from assetdesk.inventory.models import Item


log = get_logger("repo.item")


class IItemRepository(Protocol):
    async def get_by_id(self, session: AsyncSession, *, item_id: int) -> Optional[Item]: ...
    async def list_items(self, session: AsyncSession, *, unit_id: Optional[int] = None) -> Sequence[Item]: ...
    async def create_item(self, session: AsyncSession, **fields: Any) -> Item: ...
    async def update_item(self, session: AsyncSession, *, item: Item, **fields: Any) -> Item: ...
    async def delete_item(self, session: AsyncSession, *, item: Item) -> None: ...
    async def lock_items(self, session: AsyncSession, item_ids: Iterable[int]) -> dict[int, Item]: ...


class ItemRepository(IItemRepository):
    """
    Репозиторий складских позиций.
    """

    async def get_by_id(self, session: AsyncSession, *, item_id: int) -> Optional[Item]:
        stmt = (
            select(Item)
            .where(Item.id == int(item_id))
            .options(selectinload(Item.unit))
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def list_items(self, session: AsyncSession, *, unit_id: Optional[int] = None) -> Sequence[Item]:
        stmt = select(Item).options(selectinload(Item.unit)).order_by(Item.description.asc())
        if unit_id is not None:
            stmt = stmt.where(Item.unit_id == int(unit_id))
        res = await session.execute(stmt)
        return list(res.scalars())

    async def create_item(self, session: AsyncSession, **fields: Any) -> Item:
        item = Item(**fields)
        session.add(item)
        await session.flush()
        log.info({"event": "item_create", "item_id": item.id, "unit_id": item.unit_id})
        return item

    async def update_item(self, session: AsyncSession, *, item: Item, **fields: Any) -> Item:
        for key, value in fields.items():
            setattr(item, key, value)
        await session.flush()
        return item

    async def delete_item(self, session: AsyncSession, *, item: Item) -> None:
        await session.delete(item)
        await session.flush()

    async def lock_items(self, session: AsyncSession, item_ids: Iterable[int]) -> dict[int, Item]:
        """
        SELECT ... FOR UPDATE по списку items.

        Блокируем строки в порядке id: две конкурентные заявки на одни и те же items
        берут локи в одном порядке и не ловят deadlock.
        Отсутствующие id в результате просто не появятся - проверяет вызывающий код.
        """
        ids = sorted({int(i) for i in item_ids})
        if not ids:
            return {}
        res = await session.execute(
            select(Item)
            .where(Item.id.in_(ids))
            .order_by(Item.id.asc())
            .with_for_update()
        )
        return {int(it.id): it for it in res.scalars()}
