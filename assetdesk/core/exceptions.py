# path: assetdesk/core/exceptions.py
from __future__ import annotations

from typing import Any


class AssetDeskError(Exception):
    """Базовая ошибка бизнес-логики. Сервисы бросают, API переводит в HTTP-ответ."""

    code = "error"

    def __init__(self, message: str | None = None, **context: Any) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code
        self.context = context


class NotFoundError(AssetDeskError):
    code = "not_found"


class ConflictError(AssetDeskError):
    code = "conflict"


class AuthError(AssetDeskError):
    code = "bad_credentials"


class RequisitionValidationError(AssetDeskError):
    """Ссылка на несуществующую unit/пользователя/item."""

    code = "invalid_requisition"


class InsufficientStockError(ConflictError):
    code = "insufficient_stock"

    def __init__(self, *, item_id: int, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for item {item_id} (requested={requested}, available={available})",
            item_id=item_id,
            requested=requested,
            available=available,
        )
        self.item_id = item_id
        self.requested = requested
        self.available = available


class InsufficientSupplyError(ConflictError):
    code = "insufficient_supply"

    def __init__(self, *, shortages: dict[str, tuple[int, int]]) -> None:
        # shortages: counter -> (requested, available)
        parts = ", ".join(
            f"{name} (requested={req}, available={avail})" for name, (req, avail) in shortages.items()
        )
        super().__init__(f"Insufficient supply stock: {parts}", shortages=shortages)
        self.shortages = shortages


class SupplyValidationError(AssetDeskError):
    """Выдача расходников ссылается на несуществующий принтер/unit."""

    code = "invalid_supply_request"
