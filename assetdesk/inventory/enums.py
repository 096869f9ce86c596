# path: assetdesk/inventory/enums.py
from __future__ import annotations

from enum import Enum


class RequisitionStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliveryStatus(str, Enum):
    """Статус выдачи одной строки заявки."""

    PENDING = "pending"
    DELIVERED = "delivered"
