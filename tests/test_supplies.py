# path: tests/test_supplies.py
from __future__ import annotations

from sqlalchemy import func, select

from assetdesk.printers.models import SUPPLY_STOCK_ID, SupplyConsumption, SupplyStock

from .conftest import API, auth_headers

ZERO_STOCK = {
    "imaging_unit_total": 0,
    "black_toner_total": 0,
    "cyan_toner_total": 0,
    "magenta_toner_total": 0,
    "yellow_toner_total": 0,
}


def _stock(db_session) -> SupplyStock:
    db_session.expire_all()
    return db_session.get(SupplyStock, SUPPLY_STOCK_ID)


def test_stock_is_created_lazily_with_zero_counters(client, world, db_session):
    assert _stock(db_session) is None

    resp = client.get(f"{API}/printers/supply-stock", headers=auth_headers(world.printer_tech))

    assert resp.status_code == 200
    assert resp.json() == ZERO_STOCK
    assert _stock(db_session) is not None


def test_restock_adds_amounts(client, world):
    headers = auth_headers(world.admin)

    client.put(f"{API}/printers/supply-stock", json={"black_toner_total": 5, "cyan_toner_total": 2}, headers=headers)
    resp = client.put(f"{API}/printers/supply-stock", json={"black_toner_total": 3}, headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {**ZERO_STOCK, "black_toner_total": 8, "cyan_toner_total": 2}


def test_restock_rejects_negative_and_non_admin(client, world):
    negative = client.put(
        f"{API}/printers/supply-stock",
        json={"black_toner_total": -1},
        headers=auth_headers(world.admin),
    )
    manager = client.put(
        f"{API}/printers/supply-stock",
        json={"black_toner_total": 1},
        headers=auth_headers(world.manager),
    )

    assert negative.status_code == 400
    assert manager.status_code == 403


def test_consumption_decrements_exactly(client, world, seed, db_session):
    printer = seed.printer("HP 4015", "SN-1", unit_id=world.main.id)
    client.put(
        f"{API}/printers/supply-stock",
        json={"black_toner_total": 5, "imaging_unit_total": 1},
        headers=auth_headers(world.admin),
    )

    resp = client.post(
        f"{API}/printers/supplies",
        json={
            "printer_id": printer.id,
            "unit_id": world.main.id,
            "ticket_number": "T-7",
            "black_toner_requested": 2,
            "imaging_unit_requested": 1,
        },
        headers=auth_headers(world.printer_tech),
    )

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["technician_id"] == world.printer_tech.id
    assert body["technician"]["full_name"] == "Ptech"
    assert body["consumed_at"]

    stock = _stock(db_session)
    assert stock.black_toner_total == 3
    assert stock.imaging_unit_total == 0
    assert stock.cyan_toner_total == 0


def test_consumption_shortage_is_409_and_changes_nothing(client, world, db_session):
    client.put(f"{API}/printers/supply-stock", json={"black_toner_total": 5}, headers=auth_headers(world.admin))

    # чёрного хватает, голубого нет - не списывается ничего
    resp = client.post(
        f"{API}/printers/supplies",
        json={"black_toner_requested": 2, "cyan_toner_requested": 1},
        headers=auth_headers(world.printer_tech),
    )

    assert resp.status_code == 409
    assert "cyan_toner" in resp.json()["detail"]
    assert _stock(db_session).black_toner_total == 5
    assert db_session.execute(select(func.count(SupplyConsumption.id))).scalar_one() == 0


def test_consumption_log_newest_first(client, world):
    client.put(f"{API}/printers/supply-stock", json={"yellow_toner_total": 4}, headers=auth_headers(world.admin))
    headers = auth_headers(world.printer_tech)
    first = client.post(f"{API}/printers/supplies", json={"yellow_toner_requested": 1}, headers=headers).json()
    second = client.post(f"{API}/printers/supplies", json={"yellow_toner_requested": 2}, headers=headers).json()

    resp = client.get(f"{API}/printers/supplies", headers=headers)

    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()] == [second["id"], first["id"]]


def test_consumption_with_unknown_printer_or_unit_is_400(client, world, db_session):
    client.put(f"{API}/printers/supply-stock", json={"black_toner_total": 5}, headers=auth_headers(world.admin))
    headers = auth_headers(world.printer_tech)

    printer = client.post(
        f"{API}/printers/supplies",
        json={"printer_id": 9999, "black_toner_requested": 1},
        headers=headers,
    )
    unit = client.post(
        f"{API}/printers/supplies",
        json={"unit_id": 9999, "black_toner_requested": 1},
        headers=headers,
    )

    assert printer.status_code == 400
    assert printer.json()["detail"] == "Unknown printer"
    assert unit.status_code == 400
    assert unit.json()["detail"] == "Unknown unit"
    assert _stock(db_session).black_toner_total == 5
    assert db_session.execute(select(func.count(SupplyConsumption.id))).scalar_one() == 0
