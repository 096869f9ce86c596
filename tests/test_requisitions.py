# path: tests/test_requisitions.py
from __future__ import annotations

from sqlalchemy import func, select

from assetdesk.inventory.models import Item, Requisition, RequisitionLine

from .conftest import API, auth_headers


def _quantities(db_session, *item_ids: int) -> list[int]:
    db_session.expire_all()
    return [db_session.get(Item, i).quantity for i in item_ids]


def _count(db_session, model) -> int:
    return db_session.execute(select(func.count(model.id))).scalar_one()


def _payload(world, lines, **kw) -> dict:
    body = {
        "technician_id": world.tech.id,
        "unit_id": world.main.id,
        "sector": "Lab 3",
        "ticket_number": "T-100",
        "lines": lines,
    }
    body.update(kw)
    return body


def test_requisition_decrements_stock_exactly(client, world, seed, db_session):
    """
    GIVEN item A (остаток 10) и item B (остаток 2)
    WHEN заявка A x3 + B x2
    THEN остатки 7 и 0, одна заявка с двумя строками
    """
    a = seed.item(world.main.id, quantity=10, description="Patch cord")
    b = seed.item(world.main.id, quantity=2, description="RJ45 plug")

    resp = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": a.id, "quantity": 3}, {"item_id": b.id, "quantity": 2}]),
        headers=auth_headers(world.manager),
    )

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["status"] == "pending"
    assert body["requester_id"] == world.manager.id
    assert body["technician"]["full_name"] == "Tech"
    assert [(ln["item_id"], ln["quantity_requested"]) for ln in body["lines"]] == [(a.id, 3), (b.id, 2)]
    assert all(ln["delivery_status"] == "pending" for ln in body["lines"])
    assert body["lines"][0]["item"]["description"] == "Patch cord"

    assert _quantities(db_session, a.id, b.id) == [7, 0]
    assert _count(db_session, Requisition) == 1
    assert _count(db_session, RequisitionLine) == 2


def test_requisition_with_shortfall_changes_nothing(client, world, seed, db_session):
    a = seed.item(world.main.id, quantity=10)
    b = seed.item(world.main.id, quantity=2)

    resp = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": a.id, "quantity": 3}, {"item_id": b.id, "quantity": 3}]),
        headers=auth_headers(world.tech),
    )

    assert resp.status_code == 409
    assert f"item {b.id}" in resp.json()["detail"]
    assert _quantities(db_session, a.id, b.id) == [10, 2]
    assert _count(db_session, Requisition) == 0
    assert _count(db_session, RequisitionLine) == 0


def test_duplicate_item_lines_are_checked_together(client, world, seed, db_session):
    a = seed.item(world.main.id, quantity=5)

    resp = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": a.id, "quantity": 3}, {"item_id": a.id, "quantity": 3}]),
        headers=auth_headers(world.tech),
    )

    assert resp.status_code == 409
    assert _quantities(db_session, a.id) == [5]


def test_unknown_item_or_unit_is_400(client, world, seed, db_session):
    a = seed.item(world.main.id, quantity=5)
    headers = auth_headers(world.tech)

    unknown_item = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": a.id, "quantity": 1}, {"item_id": 9999, "quantity": 1}]),
        headers=headers,
    )
    unknown_unit = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": a.id, "quantity": 1}], unit_id=9999),
        headers=headers,
    )

    assert unknown_item.status_code == 400
    assert unknown_unit.status_code == 400
    assert _quantities(db_session, a.id) == [5]
    assert _count(db_session, Requisition) == 0


def test_invalid_lines_are_400(client, world, seed):
    a = seed.item(world.main.id, quantity=5)
    headers = auth_headers(world.tech)

    empty = client.post(f"{API}/requisitions", json=_payload(world, []), headers=headers)
    zero = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": a.id, "quantity": 0}]),
        headers=headers,
    )

    assert empty.status_code == 400
    assert zero.status_code == 400


def test_requisition_requires_token(client, world, seed):
    a = seed.item(world.main.id, quantity=5)

    resp = client.post(f"{API}/requisitions", json=_payload(world, [{"item_id": a.id, "quantity": 1}]))

    assert resp.status_code == 401


def _create(client, world, item_id, *, technician=None, unit=None, headers=None) -> dict:
    technician = technician or world.tech
    unit = unit or world.main
    resp = client.post(
        f"{API}/requisitions",
        json=_payload(world, [{"item_id": item_id, "quantity": 1}], technician_id=technician.id, unit_id=unit.id),
        headers=headers or auth_headers(world.admin),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_list_filters_and_detail(client, world, seed):
    a = seed.item(world.main.id, quantity=50)
    first = _create(client, world, a.id)
    second = _create(client, world, a.id, technician=world.printer_tech, unit=world.annex)
    headers = auth_headers(world.tech)

    everything = client.get(f"{API}/requisitions", headers=headers).json()
    assert [r["id"] for r in everything] == [second["id"], first["id"]]
    assert everything[0]["technician"]["full_name"] == "Ptech"

    by_unit = client.get(f"{API}/requisitions", params={"unit_id": world.annex.id}, headers=headers).json()
    assert [r["id"] for r in by_unit] == [second["id"]]

    by_tech = client.get(f"{API}/requisitions", params={"technician_id": world.tech.id}, headers=headers).json()
    assert [r["id"] for r in by_tech] == [first["id"]]

    detail = client.get(f"{API}/requisitions/{first['id']}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["requester"]["id"] == world.admin.id

    missing = client.get(f"{API}/requisitions/9999", headers=headers)
    assert missing.status_code == 404


def test_latest_is_scoped_by_role(client, world, seed):
    a = seed.item(world.main.id, quantity=50)
    ids = [_create(client, world, a.id)["id"] for _ in range(6)]
    annex_id = _create(client, world, a.id, technician=world.printer_tech, unit=world.annex)["id"]

    admin_latest = client.get(f"{API}/requisitions/latest", headers=auth_headers(world.admin)).json()
    assert [r["id"] for r in admin_latest] == [annex_id] + ids[::-1][:4]

    manager_latest = client.get(f"{API}/requisitions/latest", headers=auth_headers(world.manager)).json()
    assert [r["id"] for r in manager_latest] == ids[::-1][:5]
    assert manager_latest[0]["technician_name"] == "Tech"

    ptech_latest = client.get(f"{API}/requisitions/latest", headers=auth_headers(world.printer_tech)).json()
    assert [r["id"] for r in ptech_latest] == [annex_id]


def test_status_updates(client, world, seed):
    a = seed.item(world.main.id, quantity=5)
    created = _create(client, world, a.id)
    headers = auth_headers(world.tech)

    resp = client.patch(f"{API}/requisitions/{created['id']}/status", json={"status": "completed"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"

    bad = client.patch(f"{API}/requisitions/{created['id']}/status", json={"status": "lost"}, headers=headers)
    assert bad.status_code == 400

    missing = client.patch(f"{API}/requisitions/9999/status", json={"status": "completed"}, headers=headers)
    assert missing.status_code == 404

    line_id = created["lines"][0]["id"]
    delivered = client.patch(
        f"{API}/requisitions/lines/{line_id}/status",
        json={"delivery_status": "delivered"},
        headers=headers,
    )
    assert delivered.status_code == 200
    assert delivered.json()["delivery_status"] == "delivered"
    assert delivered.json()["delivered_at"] is not None

    reverted = client.patch(
        f"{API}/requisitions/lines/{line_id}/status",
        json={"delivery_status": "pending"},
        headers=headers,
    )
    assert reverted.json()["delivered_at"] is None
