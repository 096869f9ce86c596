# path: assetdesk/crud/printer_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.printers.models import Printer, PrinterService


class IPrinterRepository(Protocol):
    async def get_by_id(self, session: AsyncSession, *, printer_id: int) -> Optional[Printer]: ...

    async def list_active(
        self,
        session: AsyncSession,
        *,
        unit_id: Optional[int] = None,
        ip: Optional[str] = None,
        serial_number: Optional[str] = None,
        policies_applied: Optional[bool] = None,
    ) -> Sequence[Printer]: ...

    async def create_printer(self, session: AsyncSession, **fields: Any) -> Printer: ...
    async def update_printer(self, session: AsyncSession, *, printer: Printer, **fields: Any) -> Printer: ...
    async def deactivate(self, session: AsyncSession, *, printer: Printer) -> None: ...

    async def list_services(self, session: AsyncSession) -> Sequence[PrinterService]: ...
    async def create_service(self, session: AsyncSession, **fields: Any) -> PrinterService: ...
    async def get_service(self, session: AsyncSession, *, service_id: int) -> Optional[PrinterService]: ...


class PrinterRepository(IPrinterRepository):
    """
    Репозиторий принтеров и журнала их обслуживания.
    """

    async def get_by_id(self, session: AsyncSession, *, printer_id: int) -> Optional[Printer]:
        stmt = (
            select(Printer)
            .where(Printer.id == int(printer_id))
            .options(selectinload(Printer.unit))
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()

    async def list_active(
        self,
        session: AsyncSession,
        *,
        unit_id: Optional[int] = None,
        ip: Optional[str] = None,
        serial_number: Optional[str] = None,
        policies_applied: Optional[bool] = None,
    ) -> Sequence[Printer]:
        stmt = (
            select(Printer)
            .where(Printer.active.is_(True))
            .options(selectinload(Printer.unit))
            .order_by(Printer.name.asc())
        )
        if unit_id is not None:
            stmt = stmt.where(Printer.unit_id == int(unit_id))
        if ip:
            stmt = stmt.where(Printer.ip.ilike(f"%{ip}%"))
        if serial_number:
            stmt = stmt.where(Printer.serial_number.ilike(f"%{serial_number}%"))
        if policies_applied is not None:
            stmt = stmt.where(Printer.policies_applied.is_(bool(policies_applied)))
        res = await session.execute(stmt)
        return list(res.scalars())

    async def create_printer(self, session: AsyncSession, **fields: Any) -> Printer:
        printer = Printer(**fields)
        session.add(printer)
        await session.flush()
        return printer

    async def update_printer(self, session: AsyncSession, *, printer: Printer, **fields: Any) -> Printer:
        for key, value in fields.items():
            setattr(printer, key, value)
        await session.flush()
        return printer

    async def deactivate(self, session: AsyncSession, *, printer: Printer) -> None:
        printer.active = False
        await session.flush()

    # --- Журнал обслуживания ---

    async def list_services(self, session: AsyncSession) -> Sequence[PrinterService]:
        stmt = (
            select(PrinterService)
            .options(
                selectinload(PrinterService.printer),
                selectinload(PrinterService.technician),
                selectinload(PrinterService.unit),
            )
            .order_by(PrinterService.served_at.desc(), PrinterService.id.desc())
        )
        res = await session.execute(stmt)
        return list(res.scalars())

    async def create_service(self, session: AsyncSession, **fields: Any) -> PrinterService:
        record = PrinterService(**fields)
        session.add(record)
        await session.flush()
        return record

    async def get_service(self, session: AsyncSession, *, service_id: int) -> Optional[PrinterService]:
        stmt = (
            select(PrinterService)
            .where(PrinterService.id == int(service_id))
            .options(
                selectinload(PrinterService.printer),
                selectinload(PrinterService.technician),
                selectinload(PrinterService.unit),
            )
            .execution_options(populate_existing=True)
        )
        return (await session.execute(stmt)).scalar_one_or_none()
