# path: assetdesk/maintenance/enums.py
from __future__ import annotations

from enum import Enum


class TicketStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"
