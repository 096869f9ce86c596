# path: assetdesk/printers/api/api_v1/supplies.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.dependencies import (
    Identity,
    get_current_identity,
    get_printer_repository,
    get_supply_service,
    get_user_repository,
    require_capability,
)
from assetdesk.core.exceptions import InsufficientSupplyError, SupplyValidationError
from assetdesk.core.models import db_helper
from assetdesk.core.roles import Capability
from assetdesk.crud.printer_repository import IPrinterRepository
from assetdesk.crud.user_repository import IUserRepository
from assetdesk.printers.schemas.printer import PrinterServiceCreate, PrinterServiceRead
from assetdesk.printers.schemas.supply import (
    SupplyConsumptionCreate,
    SupplyConsumptionRead,
    SupplyRestock,
    SupplyStockRead,
)
from assetdesk.printers.services.supply_service import SupplyStockService


router = APIRouter(tags=["printer-supplies"])

Authenticated = Annotated[Identity, Depends(get_current_identity)]


# --- Остатки расходников ---


@router.get("/supply-stock", response_model=SupplyStockRead)
async def get_supply_stock(
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[SupplyStockService, Depends(get_supply_service)],
):
    return await service.get_stock(session)


@router.put("/supply-stock", response_model=SupplyStockRead)
async def restock_supplies(
    body: SupplyRestock,
    _: Annotated[Identity, Depends(require_capability(Capability.RESTOCK_SUPPLIES))],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[SupplyStockService, Depends(get_supply_service)],
):
    """Пополнение: присланные значения ПРИБАВЛЯЮТСЯ к текущим остаткам."""
    return await service.restock(session, amounts=body)


# --- Выдача расходников ---


@router.get("/supplies", response_model=list[SupplyConsumptionRead])
async def list_consumptions(
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[SupplyStockService, Depends(get_supply_service)],
):
    return await service.list_consumptions(session)


@router.post("/supplies", response_model=SupplyConsumptionRead, status_code=status.HTTP_201_CREATED)
async def consume_supplies(
    body: SupplyConsumptionCreate,
    identity: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[SupplyStockService, Depends(get_supply_service)],
):
    try:
        return await service.consume(session, technician_id=identity.user_id, payload=body)
    except InsufficientSupplyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except SupplyValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


# --- Журнал обслуживания принтеров ---


@router.get("/services", response_model=list[PrinterServiceRead])
async def list_services(
    _: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IPrinterRepository, Depends(get_printer_repository)],
):
    return await repo.list_services(session)


@router.post("/services", response_model=PrinterServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(
    body: PrinterServiceCreate,
    identity: Authenticated,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    repo: Annotated[IPrinterRepository, Depends(get_printer_repository)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
):
    fields = body.model_dump()
    if fields["technician_id"] is None:
        fields["technician_id"] = identity.user_id

    async with session.begin():
        if await repo.get_by_id(session, printer_id=body.printer_id) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown printer")
        if await user_repo.get_by_id(session, user_id=fields["technician_id"]) is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown technician")
        record = await repo.create_service(session, **fields)
        record = await repo.get_service(session, service_id=int(record.id))
    return record
