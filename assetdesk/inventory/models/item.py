# path: assetdesk/inventory/models/item.py
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetdesk.core.models.base import Base


class Item(Base):
    """
    Таблица items - складская позиция подразделения.

    quantity уменьшается только в транзакции создания заявки
    (RequisitionService.create_requisition), никогда не уходит в минус.
    """

    __tablename__ = "items"

    sipac_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    tender: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    description: Mapped[str] = mapped_column(String(512), nullable=False)
    item_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    measure_unit: Mapped[str] = mapped_column(String(32), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0, server_default="0")

    unit_id: Mapped[int] = mapped_column(
        ForeignKey("units.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    unit = relationship("Unit")
