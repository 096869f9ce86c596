# path: tests/test_printers.py
from __future__ import annotations

from assetdesk.core.roles import Role
from assetdesk.printers.models import Printer

from .conftest import API, auth_headers


def _names(resp) -> list[str]:
    assert resp.status_code == 200, resp.text
    return [p["name"] for p in resp.json()]


def test_list_is_scoped_to_own_unit_without_global_view(client, world, seed):
    seed.printer("Alpha", "SN-A", unit_id=world.main.id, ip="10.0.0.5")
    seed.printer("Beta", "SN-B", unit_id=world.annex.id)
    seed.printer("Gone", "SN-G", unit_id=world.main.id, active=False)

    assert _names(client.get(f"{API}/printers", headers=auth_headers(world.admin))) == ["Alpha", "Beta"]
    assert _names(client.get(f"{API}/printers", headers=auth_headers(world.tech))) == ["Alpha"]

    # чужой unit_id в запросе игнорируется
    resp = client.get(f"{API}/printers", params={"unit_id": world.annex.id}, headers=auth_headers(world.tech))
    assert _names(resp) == ["Alpha"]

    resp = client.get(f"{API}/printers", params={"unit_id": world.annex.id}, headers=auth_headers(world.admin))
    assert _names(resp) == ["Beta"]


def test_user_without_unit_sees_nothing(client, world, seed):
    seed.printer("Alpha", "SN-A", unit_id=world.main.id)
    drifter = seed.user("drifter", Role.TECHNICIAN)

    assert _names(client.get(f"{API}/printers", headers=auth_headers(drifter))) == []


def test_filters(client, world, seed):
    seed.printer("Alpha", "XK-1001", unit_id=world.main.id, ip="10.0.0.5", policies_applied=True)
    seed.printer("Beta", "ZZ-2002", unit_id=world.main.id, ip="10.0.1.9")
    headers = auth_headers(world.admin)

    assert _names(client.get(f"{API}/printers", params={"serial_number": "xk"}, headers=headers)) == ["Alpha"]
    assert _names(client.get(f"{API}/printers", params={"ip": "10.0.1"}, headers=headers)) == ["Beta"]
    assert _names(client.get(f"{API}/printers", params={"policies_applied": "true"}, headers=headers)) == ["Alpha"]


def test_create_update_and_soft_delete(client, world, db_session):
    headers = auth_headers(world.manager)

    created = client.post(
        f"{API}/printers",
        json={"name": "Lexmark", "serial_number": "LX-1", "unit_id": world.main.id},
        headers=headers,
    )
    assert created.status_code == 201, created.text
    printer_id = created.json()["id"]
    assert created.json()["active"] is True
    assert created.json()["unit"]["name"] == "Main Building"

    updated = client.put(f"{API}/printers/{printer_id}", json={"location": "Room 12"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["location"] == "Room 12"
    assert updated.json()["serial_number"] == "LX-1"

    deleted = client.delete(f"{API}/printers/{printer_id}", headers=headers)
    assert deleted.status_code == 204

    db_session.expire_all()
    assert db_session.get(Printer, printer_id).active is False
    assert _names(client.get(f"{API}/printers", headers=headers)) == []

    again = client.delete(f"{API}/printers/{printer_id}", headers=headers)
    assert again.status_code == 404


def test_update_rejects_null_for_required_fields(client, world, seed, db_session):
    printer = seed.printer("Kyocera", "KY-1", unit_id=world.main.id, policies_applied=True)
    headers = auth_headers(world.manager)

    for field in ("name", "serial_number", "policies_applied"):
        resp = client.put(f"{API}/printers/{printer.id}", json={field: None}, headers=headers)
        assert resp.status_code == 400, (field, resp.text)
        assert resp.json()["detail"] == "Invalid data"

    db_session.expire_all()
    stored = db_session.get(Printer, printer.id)
    assert (stored.name, stored.serial_number, stored.policies_applied) == ("Kyocera", "KY-1", True)

    # необязательные поля обнулять можно
    cleared = client.put(f"{API}/printers/{printer.id}", json={"location": None}, headers=headers)
    assert cleared.status_code == 200
    assert cleared.json()["location"] is None


def test_technician_cannot_manage_printers(client, world):
    resp = client.post(
        f"{API}/printers",
        json={"name": "Lexmark", "serial_number": "LX-1"},
        headers=auth_headers(world.printer_tech),
    )
    assert resp.status_code == 403


def test_service_log_defaults_to_caller(client, world, seed):
    printer = seed.printer("Alpha", "SN-A", unit_id=world.main.id)
    headers = auth_headers(world.printer_tech)

    resp = client.post(
        f"{API}/printers/services",
        json={"printer_id": printer.id, "description": "Replaced fuser"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["technician_id"] == world.printer_tech.id
    assert body["printer"]["serial_number"] == "SN-A"

    listed = client.get(f"{API}/printers/services", headers=headers)
    assert [s["id"] for s in listed.json()] == [body["id"]]

    unknown = client.post(
        f"{API}/printers/services",
        json={"printer_id": 9999, "description": "Nope"},
        headers=headers,
    )
    assert unknown.status_code == 400
