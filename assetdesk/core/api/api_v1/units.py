# path: assetdesk/core/api/api_v1/units.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.dependencies import Identity, get_unit_repository, require_capability
from assetdesk.core.models import db_helper
from assetdesk.core.roles import Capability
from assetdesk.core.schemas.unit import UnitCreate, UnitRead
from assetdesk.crud.unit_repository import IUnitRepository


router = APIRouter(tags=["units"])
log = get_logger("api.units")

UnitAdmin = Annotated[Identity, Depends(require_capability(Capability.MANAGE_UNITS))]


@router.get("", response_model=list[UnitRead])
async def list_units(
    _: UnitAdmin,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    return await unit_repo.list_units(session)


@router.post("", response_model=UnitRead, status_code=status.HTTP_201_CREATED)
async def create_unit(
    body: UnitCreate,
    _: UnitAdmin,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    try:
        async with session.begin():
            unit = await unit_repo.create_unit(session, **body.model_dump())
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Unit name already in use")
    log.info({"event": "unit_created", "unit_id": int(unit.id)})
    return unit


@router.put("/{unit_id}", response_model=UnitRead)
async def update_unit(
    unit_id: int,
    body: UnitCreate,
    _: UnitAdmin,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    try:
        async with session.begin():
            unit = await unit_repo.get_by_id(session, unit_id=unit_id)
            if unit is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unit not found")
            unit = await unit_repo.update_unit(session, unit=unit, **body.model_dump())
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Unit name already in use")
    return unit


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(
    unit_id: int,
    identity: UnitAdmin,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    try:
        async with session.begin():
            unit = await unit_repo.get_by_id(session, unit_id=unit_id)
            if unit is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unit not found")
            await unit_repo.delete_unit(session, unit=unit)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Unit is referenced by users, items or requisitions",
        )
    log.info({"event": "unit_deleted", "unit_id": unit_id, "by": identity.user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
