# path: assetdesk/core/dependencies.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from assetdesk.app_logging import get_logger
from assetdesk.core.roles import Capability, Role, has_capability
from assetdesk.core.security import decode_token
from assetdesk.core.services.auth_service import AuthService
from assetdesk.crud.item_repository import IItemRepository, ItemRepository
from assetdesk.crud.maintenance_repository import IMaintenanceRepository, MaintenanceRepository
from assetdesk.crud.printer_repository import IPrinterRepository, PrinterRepository
from assetdesk.crud.report_repository import IReportRepository, ReportRepository
from assetdesk.crud.requisition_repository import IRequisitionRepository, RequisitionRepository
from assetdesk.crud.supply_repository import ISupplyRepository, SupplyRepository
from assetdesk.crud.unit_repository import IUnitRepository, UnitRepository
from assetdesk.crud.user_repository import IUserRepository, UserRepository
from assetdesk.inventory.services.requisition_service import RequisitionService
from assetdesk.printers.services.supply_service import SupplyStockService


# auto_error=False: отсутствие заголовка обрабатываем сами (401, а не 403 как по умолчанию)
bearer_scheme = HTTPBearer(auto_error=False)
log = get_logger("deps")


@dataclass(frozen=True)
class Identity:
    """Кто делает запрос (из JWT): id, роль, подразделение."""

    user_id: int
    role: Role
    unit_id: Optional[int]

    def can(self, capability: Capability) -> bool:
        return has_capability(self.role, capability)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
        unit_id = payload.get("unit_id")
        return Identity(
            user_id=int(payload["sub"]),
            role=Role(payload["role"]),
            unit_id=int(unit_id) if unit_id is not None else None,
        )
    except JWTError as e:
        log.info({"event": "jwt_error", "error": str(e)})
        raise _unauthorized("Invalid or expired token") from e
    except (KeyError, ValueError, TypeError) as e:
        log.info({"event": "jwt_bad_payload", "error": str(e)})
        raise _unauthorized("Invalid or expired token") from e


def require_capability(capability: Capability) -> Callable[..., Identity]:
    """
    Фабрика зависимостей: пропускает только роли, у которых есть capability.

    401 - нет/битый токен (из get_current_identity), 403 - роль не подходит.
    """

    def _checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not identity.can(capability):
            log.info(
                {
                    "event": "access_denied",
                    "user_id": identity.user_id,
                    "role": identity.role.value,
                    "capability": capability.value,
                }
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied: insufficient role",
            )
        return identity

    return _checker


@lru_cache(maxsize=1)
def _user_repo_singleton() -> UserRepository:
    return UserRepository()


def get_user_repository() -> IUserRepository:
    return _user_repo_singleton()


@lru_cache(maxsize=1)
def _unit_repo_singleton() -> UnitRepository:
    return UnitRepository()


def get_unit_repository() -> IUnitRepository:
    return _unit_repo_singleton()


@lru_cache(maxsize=1)
def _item_repo_singleton() -> ItemRepository:
    return ItemRepository()


def get_item_repository() -> IItemRepository:
    return _item_repo_singleton()


@lru_cache(maxsize=1)
def _requisition_repo_singleton() -> RequisitionRepository:
    return RequisitionRepository()


def get_requisition_repository() -> IRequisitionRepository:
    return _requisition_repo_singleton()


@lru_cache(maxsize=1)
def _report_repo_singleton() -> ReportRepository:
    return ReportRepository()


def get_report_repository() -> IReportRepository:
    return _report_repo_singleton()


@lru_cache(maxsize=1)
def _printer_repo_singleton() -> PrinterRepository:
    return PrinterRepository()


def get_printer_repository() -> IPrinterRepository:
    return _printer_repo_singleton()


@lru_cache(maxsize=1)
def _supply_repo_singleton() -> SupplyRepository:
    return SupplyRepository()


def get_supply_repository() -> ISupplyRepository:
    return _supply_repo_singleton()


@lru_cache(maxsize=1)
def _maintenance_repo_singleton() -> MaintenanceRepository:
    return MaintenanceRepository()


def get_maintenance_repository() -> IMaintenanceRepository:
    return _maintenance_repo_singleton()


def get_auth_service(
    user_repo: IUserRepository = Depends(get_user_repository),
) -> AuthService:
    return AuthService(repo=user_repo)


def get_requisition_service(
    requisition_repo: IRequisitionRepository = Depends(get_requisition_repository),
    item_repo: IItemRepository = Depends(get_item_repository),
    unit_repo: IUnitRepository = Depends(get_unit_repository),
    user_repo: IUserRepository = Depends(get_user_repository),
) -> RequisitionService:
    return RequisitionService(
        requisition_repo=requisition_repo,
        item_repo=item_repo,
        unit_repo=unit_repo,
        user_repo=user_repo,
    )


def get_supply_service(
    supply_repo: ISupplyRepository = Depends(get_supply_repository),
    printer_repo: IPrinterRepository = Depends(get_printer_repository),
    unit_repo: IUnitRepository = Depends(get_unit_repository),
) -> SupplyStockService:
    return SupplyStockService(repo=supply_repo, printer_repo=printer_repo, unit_repo=unit_repo)
