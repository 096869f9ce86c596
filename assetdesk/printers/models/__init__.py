# path: assetdesk/printers/models/__init__.py
from __future__ import annotations

from assetdesk.printers.models.printer import Printer, PrinterService
from assetdesk.printers.models.supply import (
    SUPPLY_COUNTERS,
    SUPPLY_STOCK_ID,
    SupplyConsumption,
    SupplyStock,
)

__all__ = [
    "Printer",
    "PrinterService",
    "SupplyStock",
    "SupplyConsumption",
    "SUPPLY_COUNTERS",
    "SUPPLY_STOCK_ID",
]
