# path: assetdesk/inventory/models/requisition.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from assetdesk.core.models.base import Base, str_enum
from assetdesk.inventory.enums import DeliveryStatus, RequisitionStatus


class Requisition(Base):
    """
    Таблица requisitions - заявка техника на выдачу позиций со склада.

    requester_id  - кто создал (берётся из токена)
    technician_id - ответственный техник
    """

    __tablename__ = "requisitions"

    requester_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    technician_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    unit_id: Mapped[int] = mapped_column(ForeignKey("units.id", ondelete="RESTRICT"), nullable=False, index=True)

    sector: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    ticket_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    asset_tag: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    status: Mapped[RequisitionStatus] = mapped_column(
        str_enum(RequisitionStatus, "requisition_status"),
        nullable=False,
        default=RequisitionStatus.PENDING,
        server_default=RequisitionStatus.PENDING.value,
        index=True,
    )

    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    requester = relationship("User", foreign_keys=[requester_id])
    technician = relationship("User", foreign_keys=[technician_id])
    unit = relationship("Unit")

    lines = relationship(
        "RequisitionLine",
        back_populates="requisition",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RequisitionLine.id",
    )


class RequisitionLine(Base):
    """Строка заявки: item + запрошенное количество + статус выдачи."""

    __tablename__ = "requisition_lines"

    requisition_id: Mapped[int] = mapped_column(
        ForeignKey("requisitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity_requested: Mapped[int] = mapped_column(Integer, nullable=False)

    delivery_status: Mapped[DeliveryStatus] = mapped_column(
        str_enum(DeliveryStatus, "delivery_status"),
        nullable=False,
        default=DeliveryStatus.PENDING,
        server_default=DeliveryStatus.PENDING.value,
    )
    delivered_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    requisition = relationship("Requisition", back_populates="lines")
    item = relationship("Item")
