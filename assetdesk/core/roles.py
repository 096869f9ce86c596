# path: assetdesk/core/roles.py
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """
    Роль пользователя (закрытый список).

    Значения:
    - admin:                  полный доступ
    - manager:                руководитель подразделения (видит свою unit)
    - technician:             техник общего профиля
    - printer_technician:     техник по принтерам
    - electronics_technician: техник по ремонту электроники
    """

    ADMIN = "admin"
    MANAGER = "manager"
    TECHNICIAN = "technician"
    PRINTER_TECHNICIAN = "printer_technician"
    ELECTRONICS_TECHNICIAN = "electronics_technician"

    @property
    def is_technician(self) -> bool:
        return self in TECHNICIAN_ROLES


TECHNICIAN_ROLES = frozenset(
    {
        Role.TECHNICIAN,
        Role.PRINTER_TECHNICIAN,
        Role.ELECTRONICS_TECHNICIAN,
    }
)


class Capability(str, Enum):
    MANAGE_UNITS = "manage_units"
    MANAGE_USERS = "manage_users"
    MANAGE_ITEMS = "manage_items"
    MANAGE_PRINTERS = "manage_printers"
    RESTOCK_SUPPLIES = "restock_supplies"
    VIEW_GLOBAL_STATS = "view_global_stats"
    VIEW_TECHNICIAN_REPORTS = "view_technician_reports"
    WORK_MAINTENANCE = "work_maintenance"
    VIEW_ALL_PRINTERS = "view_all_printers"


# Таблица прав: роль -> набор capability.
# Проверки в коде идут только через эту таблицу, сравнений роли со строкой нет.
ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.MANAGER: frozenset(
        {
            Capability.MANAGE_ITEMS,
            Capability.MANAGE_PRINTERS,
            Capability.VIEW_TECHNICIAN_REPORTS,
        }
    ),
    Role.TECHNICIAN: frozenset(),
    Role.PRINTER_TECHNICIAN: frozenset(),
    Role.ELECTRONICS_TECHNICIAN: frozenset({Capability.WORK_MAINTENANCE}),
}


def has_capability(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())
