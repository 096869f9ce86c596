# path: tests/conftest.py
from __future__ import annotations

import os
import tempfile
from decimal import Decimal
from types import SimpleNamespace
from typing import Optional

# Настройки читаются при импорте assetdesk.*, поэтому окружение - ДО импортов приложения
_DB_DIR = tempfile.mkdtemp(prefix="assetdesk-tests-")
DB_PATH = os.path.join(_DB_DIR, "test.sqlite3")
os.environ["APP_CONFIG__DB__URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["APP_CONFIG__AUTH__SECRET_KEY"] = "test-secret-key"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from assetdesk.core.models import Base, Unit, User, db_helper  # noqa: E402
from assetdesk.core.roles import Role  # noqa: E402
from assetdesk.core.security import create_access_token, hash_password  # noqa: E402
from assetdesk.inventory.models import Item  # noqa: E402
from assetdesk.main import main_app  # noqa: E402
from assetdesk.printers.models import Printer  # noqa: E402

API = "/api/v1"
PASSWORD = "secret123"

sync_engine = create_engine(f"sqlite:///{DB_PATH}")


def _sqlite_fk_on(dbapi_connection, connection_record) -> None:
    # sqlite по умолчанию не проверяет внешние ключи
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


event.listen(sync_engine, "connect", _sqlite_fk_on)
event.listen(db_helper.engine.sync_engine, "connect", _sqlite_fk_on)


@pytest.fixture(autouse=True)
def fresh_schema():
    """Каждый тест - с чистой схемой."""
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield


@pytest.fixture()
def db_session():
    with Session(sync_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture()
def client():
    # контекстный менеджер запускает lifespan: на выходе db_helper.dispose()
    with TestClient(main_app) as c:
        yield c


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        subject=int(user.id),
        extra={"role": user.role.value, "unit_id": user.unit_id},
    )
    return {"Authorization": f"Bearer {token}"}


class Seeder:
    """Быстрое наполнение БД через sync-сессию (минуя API)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj

    def unit(self, name: str = "Central Campus", **kw) -> Unit:
        return self._save(Unit(name=name, **kw))

    def user(
        self,
        username: str,
        role: Role,
        *,
        unit_id: Optional[int] = None,
        password: str = PASSWORD,
        hashed_password: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> User:
        return self._save(
            User(
                username=username,
                full_name=full_name or username.title(),
                role=role,
                unit_id=unit_id,
                hashed_password=hashed_password or hash_password(password),
            )
        )

    def item(self, unit_id: int, *, quantity: int, description: str = "Cable", **kw) -> Item:
        kw.setdefault("measure_unit", "pcs")
        kw.setdefault("unit_price", Decimal("1.50"))
        return self._save(Item(unit_id=unit_id, quantity=quantity, description=description, **kw))

    def printer(self, name: str, serial_number: str, *, unit_id: Optional[int] = None, **kw) -> Printer:
        kw.setdefault("active", True)
        kw.setdefault("policies_applied", False)
        return self._save(Printer(name=name, serial_number=serial_number, unit_id=unit_id, **kw))


@pytest.fixture()
def seed(db_session) -> Seeder:
    return Seeder(db_session)


@pytest.fixture()
def world(seed):
    """
    Базовый набор:
    - два подразделения (main, annex)
    - по пользователю на каждую роль; все, кроме admin, в подразделении main
    """
    main = seed.unit("Main Building", code="MB")
    annex = seed.unit("Annex", code="AX")
    return SimpleNamespace(
        main=main,
        annex=annex,
        admin=seed.user("admin", Role.ADMIN),
        manager=seed.user("manager", Role.MANAGER, unit_id=main.id),
        tech=seed.user("tech", Role.TECHNICIAN, unit_id=main.id),
        printer_tech=seed.user("ptech", Role.PRINTER_TECHNICIAN, unit_id=main.id),
        electronics_tech=seed.user("etech", Role.ELECTRONICS_TECHNICIAN, unit_id=main.id),
    )
