# assetdesk/printers/api/api_v1/__init__.py
from __future__ import annotations
from fastapi import APIRouter

from assetdesk.core.config import settings
from .printers import router as printers_router
from .supplies import router as supplies_router

router = APIRouter()
# supplies раньше printers: иначе /supply-stock поймает PUT /{printer_id}
router.include_router(supplies_router, prefix=settings.api.v1.printers)
router.include_router(printers_router, prefix=settings.api.v1.printers)
