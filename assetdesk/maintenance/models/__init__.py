# path: assetdesk/maintenance/models/__init__.py
from __future__ import annotations

from assetdesk.maintenance.models.ticket import MaintenanceTicket

__all__ = ["MaintenanceTicket"]
