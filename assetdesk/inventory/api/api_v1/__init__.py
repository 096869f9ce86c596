# assetdesk/inventory/api/api_v1/__init__.py
from __future__ import annotations
from fastapi import APIRouter

from assetdesk.core.config import settings
from .items import router as items_router
from .reports import router as reports_router
from .requisitions import router as requisitions_router

router = APIRouter()
router.include_router(items_router, prefix=settings.api.v1.items)
router.include_router(requisitions_router, prefix=settings.api.v1.requisitions)
router.include_router(reports_router, prefix=settings.api.v1.reports)
