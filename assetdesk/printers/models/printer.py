# path: assetdesk/printers/models/printer.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, false, true
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from assetdesk.core.models.base import Base


class Printer(Base):
    """
    Таблица printers.

    Удаление - мягкое: active=False, строка остаётся (на неё ссылаются
    printer_services и supply_consumptions).
    """

    __tablename__ = "printers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    serial_number: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    ip: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    unit_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("units.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    policies_applied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true(), index=True)

    unit = relationship("Unit")


class PrinterService(Base):
    """Журнал обслуживания принтеров (только добавление)."""

    __tablename__ = "printer_services"

    printer_id: Mapped[int] = mapped_column(ForeignKey("printers.id", ondelete="RESTRICT"), nullable=False, index=True)
    technician_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    unit_id: Mapped[Optional[int]] = mapped_column(ForeignKey("units.id", ondelete="RESTRICT"), nullable=True)

    ticket_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    served_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    printer = relationship("Printer")
    technician = relationship("User")
    unit = relationship("Unit")
