# path: assetdesk/inventory/models/__init__.py
from __future__ import annotations

from assetdesk.inventory.models.item import Item
from assetdesk.inventory.models.requisition import Requisition, RequisitionLine

__all__ = [
    "Item",
    "Requisition",
    "RequisitionLine",
]
