# path: assetdesk/printers/models/supply.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from assetdesk.core.models.base import Base


# Единственная строка supply_stock всегда имеет этот id
SUPPLY_STOCK_ID = 1

# Типы расходников. Колонки: <name>_total в supply_stock, <name>_requested в supply_consumptions.
SUPPLY_COUNTERS: tuple[str, ...] = (
    "imaging_unit",
    "black_toner",
    "cyan_toner",
    "magenta_toner",
    "yellow_toner",
)


class SupplyStock(Base):
    """
    Таблица supply_stock - остатки расходников для принтеров.

    Singleton: одна строка с id=SUPPLY_STOCK_ID. Меняется только через
    SupplyStockService (под FOR UPDATE в транзакции).
    """

    __tablename__ = "supply_stock"

    imaging_unit_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    black_toner_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    cyan_toner_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    magenta_toner_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    yellow_toner_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")


class SupplyConsumption(Base):
    """Журнал выдачи расходников (только добавление)."""

    __tablename__ = "supply_consumptions"

    printer_id: Mapped[Optional[int]] = mapped_column(ForeignKey("printers.id", ondelete="RESTRICT"), nullable=True, index=True)
    technician_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    unit_id: Mapped[Optional[int]] = mapped_column(ForeignKey("units.id", ondelete="RESTRICT"), nullable=True)

    ticket_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    imaging_unit_requested: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    black_toner_requested: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    cyan_toner_requested: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    magenta_toner_requested: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    yellow_toner_requested: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    consumed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    technician = relationship("User")
    printer = relationship("Printer")
