# assetdesk/maintenance/api/api_v1/__init__.py
from __future__ import annotations
from fastapi import APIRouter

from assetdesk.core.config import settings
from .tickets import router as tickets_router

router = APIRouter()
router.include_router(tickets_router, prefix=settings.api.v1.maintenance)
