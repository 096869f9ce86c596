# path: assetdesk/core/models/unit.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Unit(Base):
    """
    Организационная единица (подразделение / кампус).
    На неё ссылаются users, items, printers, requisitions.
    """
    __tablename__ = "units"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    code: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    campus: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
