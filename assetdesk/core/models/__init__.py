# path: assetdesk/core/models/__init__.py

__all__ = (
    "db_helper",
    "Base",
    "User",
    "Unit",
)

from .db_helper import db_helper
from .base import Base
from .unit import Unit
from .user import User

# Модели доменных модулей (inventory / printers / maintenance) здесь НЕ импортируем:
# они сами импортируют Base отсюда, и обратный импорт даёт цикл.
# Для Alembic все модули подтягиваются в alembic/env.py.
