# path: assetdesk/maintenance/models/ticket.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from assetdesk.core.models.base import Base, str_enum
from assetdesk.maintenance.enums import TicketStatus


class MaintenanceTicket(Base):
    """
    Таблица maintenance_tickets - очередь ремонта электроники.

    pending -> in_progress (start) -> done (finish, с обязательным technical_report)
    """

    __tablename__ = "maintenance_tickets"

    ticket_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    technician_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    equipment: Mapped[str] = mapped_column(String(255), nullable=False)
    problem_description: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[TicketStatus] = mapped_column(
        str_enum(TicketStatus, "ticket_status"),
        nullable=False,
        default=TicketStatus.PENDING,
        server_default=TicketStatus.PENDING.value,
        index=True,
    )
    technical_report: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    technician = relationship("User")
