# path: assetdesk/inventory/api/api_v1/items.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.dependencies import (
    Identity,
    get_current_identity,
    get_item_repository,
    get_unit_repository,
    require_capability,
)
from assetdesk.core.models import db_helper
from assetdesk.core.roles import Capability
from assetdesk.crud.item_repository import IItemRepository
from assetdesk.crud.unit_repository import IUnitRepository
from assetdesk.inventory.schemas.item import ItemCreate, ItemRead


router = APIRouter(tags=["items"])
log = get_logger("api.items")

ItemManager = Annotated[Identity, Depends(require_capability(Capability.MANAGE_ITEMS))]


@router.get("", response_model=list[ItemRead])
async def list_items(
    _: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    item_repo: Annotated[IItemRepository, Depends(get_item_repository)],
    unit_id: Optional[int] = None,
):
    return await item_repo.list_items(session, unit_id=unit_id)


@router.post("", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(
    body: ItemCreate,
    _: ItemManager,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    item_repo: Annotated[IItemRepository, Depends(get_item_repository)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    async with session.begin():
        if await unit_repo.get_by_id(session, unit_id=body.unit_id) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown unit")
        item = await item_repo.create_item(session, **body.model_dump())
        item = await item_repo.get_by_id(session, item_id=int(item.id))
    return item


@router.put("/{item_id}", response_model=ItemRead)
async def update_item(
    item_id: int,
    body: ItemCreate,
    _: ItemManager,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    item_repo: Annotated[IItemRepository, Depends(get_item_repository)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    async with session.begin():
        item = await item_repo.get_by_id(session, item_id=item_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        if await unit_repo.get_by_id(session, unit_id=body.unit_id) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown unit")
        await item_repo.update_item(session, item=item, **body.model_dump())
        item = await item_repo.get_by_id(session, item_id=item_id)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    identity: ItemManager,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    item_repo: Annotated[IItemRepository, Depends(get_item_repository)],
):
    try:
        async with session.begin():
            item = await item_repo.get_by_id(session, item_id=item_id)
            if item is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
            await item_repo.delete_item(session, item=item)
    except IntegrityError:
        # позиция уже фигурирует в строках заявок
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Item is referenced by requisition lines",
        )
    log.info({"event": "item_deleted", "item_id": item_id, "by": identity.user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
