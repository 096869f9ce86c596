# assetdesk/core/api/api_v1/__init__.py
from fastapi import APIRouter

from assetdesk.core.config import settings
from .auth import router as auth_router
from .units import router as units_router
from .users import router as users_router
from assetdesk.inventory.api.api_v1 import router as inventory_router
from assetdesk.maintenance.api.api_v1 import router as maintenance_router
from assetdesk.printers.api.api_v1 import router as printers_router


router = APIRouter(prefix=settings.api.v1.prefix)

# /api/<v1>/auth/...
router.include_router(
    auth_router,
    prefix=settings.api.v1.auth,   # <- префикс берём из конфига
)

# /api/<v1>/users/...
router.include_router(
    users_router,
    prefix=settings.api.v1.users,
)

# /api/<v1>/units/...
router.include_router(
    units_router,
    prefix=settings.api.v1.units,
)

# /api/<v1>/items, /requisitions, /reports
router.include_router(inventory_router)

# /api/<v1>/maintenance/...
router.include_router(maintenance_router)

# /api/<v1>/printers/... (+ supplies, supply-stock, services)
router.include_router(printers_router)
