# path: assetdesk/printers/api/api_v1/printers.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.app_logging import get_logger
from assetdesk.core.dependencies import (
    Identity,
    get_current_identity,
    get_printer_repository,
    get_unit_repository,
    require_capability,
)
from assetdesk.core.models import db_helper
from assetdesk.core.roles import Capability
from assetdesk.crud.printer_repository import IPrinterRepository
from assetdesk.crud.unit_repository import IUnitRepository
from assetdesk.printers.schemas.printer import PrinterCreate, PrinterRead, PrinterUpdate


router = APIRouter(tags=["printers"])
log = get_logger("api.printers")

PrinterManager = Annotated[Identity, Depends(require_capability(Capability.MANAGE_PRINTERS))]


@router.get("", response_model=list[PrinterRead])
async def list_printers(
    identity: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IPrinterRepository, Depends(get_printer_repository)],
    ip: Optional[str] = None,
    serial_number: Optional[str] = None,
    unit_id: Optional[int] = None,
    policies_applied: Optional[bool] = None,
):
    """
    Активные принтеры.

    Без VIEW_ALL_PRINTERS видны только принтеры своего подразделения
    (фильтр unit_id из запроса игнорируется; нет подразделения -> пустой список).
    """
    if not identity.can(Capability.VIEW_ALL_PRINTERS):
        if identity.unit_id is None:
            return []
        unit_id = identity.unit_id

    return await repo.list_active(
        session,
        unit_id=unit_id,
        ip=ip,
        serial_number=serial_number,
        policies_applied=policies_applied,
    )


@router.post("", response_model=PrinterRead, status_code=status.HTTP_201_CREATED)
async def create_printer(
    body: PrinterCreate,
    identity: PrinterManager,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IPrinterRepository, Depends(get_printer_repository)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    async with session.begin():
        if body.unit_id is not None and await unit_repo.get_by_id(session, unit_id=body.unit_id) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown unit")
        printer = await repo.create_printer(session, active=True, **body.model_dump())
        printer = await repo.get_by_id(session, printer_id=int(printer.id))

    log.info({"event": "printer_created", "printer_id": int(printer.id), "by": identity.user_id})
    return printer


@router.put("/{printer_id}", response_model=PrinterRead)
async def update_printer(
    printer_id: int,
    body: PrinterUpdate,
    _: PrinterManager,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IPrinterRepository, Depends(get_printer_repository)],
    unit_repo: Annotated[IUnitRepository, Depends(get_unit_repository)],
):
    # частичное обновление: только реально присланные поля
    fields = body.model_dump(exclude_unset=True)
    async with session.begin():
        printer = await repo.get_by_id(session, printer_id=printer_id)
        if printer is None or not printer.active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Printer not found")
        if fields.get("unit_id") is not None and await unit_repo.get_by_id(session, unit_id=fields["unit_id"]) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown unit")
        await repo.update_printer(session, printer=printer, **fields)
        printer = await repo.get_by_id(session, printer_id=printer_id)
    return printer


@router.delete("/{printer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_printer(
    printer_id: int,
    identity: PrinterManager,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IPrinterRepository, Depends(get_printer_repository)],
):
    """Мягкое удаление: active=False, история обслуживания сохраняется."""
    async with session.begin():
        printer = await repo.get_by_id(session, printer_id=printer_id)
        if printer is None or not printer.active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Printer not found")
        await repo.deactivate(session, printer=printer)

    log.info({"event": "printer_deactivated", "printer_id": printer_id, "by": identity.user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
