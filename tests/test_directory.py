# path: tests/test_directory.py
"""Units, users, items: обычный CRUD и права."""
from __future__ import annotations

from assetdesk.core.models import User

from .conftest import API, PASSWORD, auth_headers


# --- Units ---


def test_unit_crud(client, world):
    headers = auth_headers(world.admin)

    created = client.post(f"{API}/units", json={"name": "Library", "campus": "North"}, headers=headers)
    assert created.status_code == 201
    unit_id = created.json()["id"]

    duplicate = client.post(f"{API}/units", json={"name": "Library"}, headers=headers)
    assert duplicate.status_code == 409

    listed = client.get(f"{API}/units", headers=headers).json()
    assert [u["name"] for u in listed] == ["Annex", "Library", "Main Building"]

    updated = client.put(f"{API}/units/{unit_id}", json={"name": "Central Library"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["name"] == "Central Library"

    assert client.delete(f"{API}/units/{unit_id}", headers=headers).status_code == 204
    assert client.delete(f"{API}/units/{unit_id}", headers=headers).status_code == 404


def test_referenced_unit_cannot_be_deleted(client, world):
    resp = client.delete(f"{API}/units/{world.main.id}", headers=auth_headers(world.admin))
    assert resp.status_code == 409


# --- Users ---


def test_user_create_and_duplicate(client, world):
    headers = auth_headers(world.admin)
    payload = {
        "username": "newbie",
        "password": "longenough",
        "full_name": "New Person",
        "role": "printer_technician",
        "email": "newbie@campus.edu",
        "unit_id": world.annex.id,
    }

    created = client.post(f"{API}/users", json=payload, headers=headers)
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["role"] == "printer_technician"
    assert body["unit"] == {"id": world.annex.id, "name": "Annex"}
    assert "password" not in body and "hashed_password" not in body

    duplicate = client.post(f"{API}/users", json=payload, headers=headers)
    assert duplicate.status_code == 409

    login = client.post(f"{API}/auth/login", json={"username": "newbie", "password": "longenough"})
    assert login.status_code == 200


def test_user_create_validation(client, world):
    headers = auth_headers(world.admin)
    base = {"username": "someone", "password": "longenough", "full_name": "Some One", "role": "technician"}

    assert client.post(f"{API}/users", json={**base, "role": "gerente"}, headers=headers).status_code == 400
    assert client.post(f"{API}/users", json={**base, "password": "123"}, headers=headers).status_code == 400
    assert client.post(f"{API}/users", json=base, headers=auth_headers(world.manager)).status_code == 403


def test_user_list_filters(client, world):
    headers = auth_headers(world.tech)

    technicians = client.get(f"{API}/users", params={"role_type": "technician"}, headers=headers).json()
    assert sorted(u["username"] for u in technicians) == ["etech", "ptech", "tech"]

    managers = client.get(f"{API}/users", params={"role": "manager"}, headers=headers).json()
    assert [u["username"] for u in managers] == ["manager"]

    in_main = client.get(f"{API}/users", params={"unit_id": world.main.id}, headers=headers).json()
    assert "admin" not in {u["username"] for u in in_main}


def test_user_update(client, world):
    resp = client.put(
        f"{API}/users/{world.tech.id}",
        json={"full_name": "Senior Tech", "role": "electronics_technician", "unit_id": world.annex.id},
        headers=auth_headers(world.admin),
    )
    assert resp.status_code == 200
    assert resp.json()["full_name"] == "Senior Tech"
    assert resp.json()["unit"]["name"] == "Annex"

    missing = client.put(
        f"{API}/users/9999",
        json={"full_name": "Nobody Here", "role": "technician"},
        headers=auth_headers(world.admin),
    )
    assert missing.status_code == 404


def test_user_delete_rules(client, world, seed, db_session):
    headers = auth_headers(world.admin)

    assert client.delete(f"{API}/users/{world.admin.id}", headers=headers).status_code == 403

    # ответственный по заявке - удалить нельзя
    item = seed.item(world.main.id, quantity=3)
    client.post(
        f"{API}/requisitions",
        json={"technician_id": world.tech.id, "unit_id": world.main.id, "lines": [{"item_id": item.id, "quantity": 1}]},
        headers=headers,
    )
    assert client.delete(f"{API}/users/{world.tech.id}", headers=headers).status_code == 409

    etech_id = world.electronics_tech.id
    resp = client.delete(f"{API}/users/{etech_id}", headers=headers)
    assert resp.status_code == 204
    db_session.expire_all()
    assert db_session.get(User, etech_id) is None

    assert client.delete(f"{API}/users/9999", headers=headers).status_code == 404


def test_reset_password(client, world):
    headers = auth_headers(world.admin)

    resp = client.put(
        f"{API}/users/reset-password",
        json={"username": "tech", "new_password": "reset-me"},
        headers=headers,
    )
    assert resp.status_code == 200

    assert client.post(f"{API}/auth/login", json={"username": "tech", "password": PASSWORD}).status_code == 401
    assert client.post(f"{API}/auth/login", json={"username": "tech", "password": "reset-me"}).status_code == 200

    unknown = client.put(
        f"{API}/users/reset-password",
        json={"username": "ghost", "new_password": "reset-me"},
        headers=headers,
    )
    assert unknown.status_code == 404


# --- Items ---


def test_item_crud(client, world):
    headers = auth_headers(world.manager)
    payload = {
        "description": "HDMI cable 2m",
        "measure_unit": "pcs",
        "quantity": 12,
        "unit_price": "9.90",
        "unit_id": world.main.id,
    }

    created = client.post(f"{API}/items", json=payload, headers=headers)
    assert created.status_code == 201, created.text
    item_id = created.json()["id"]
    assert created.json()["unit"]["name"] == "Main Building"

    updated = client.put(f"{API}/items/{item_id}", json={**payload, "quantity": 20}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 20

    listed = client.get(f"{API}/items", params={"unit_id": world.annex.id}, headers=auth_headers(world.tech))
    assert listed.json() == []

    assert client.put(f"{API}/items/9999", json=payload, headers=headers).status_code == 404
    assert client.post(f"{API}/items", json=payload, headers=auth_headers(world.tech)).status_code == 403
    assert client.post(f"{API}/items", json={**payload, "quantity": -1}, headers=headers).status_code == 400

    assert client.delete(f"{API}/items/{item_id}", headers=headers).status_code == 204


def test_item_referenced_by_requisition_cannot_be_deleted(client, world, seed):
    item = seed.item(world.main.id, quantity=3)
    created = client.post(
        f"{API}/requisitions",
        json={"technician_id": world.tech.id, "unit_id": world.main.id, "lines": [{"item_id": item.id, "quantity": 1}]},
        headers=auth_headers(world.tech),
    )
    assert created.status_code == 201

    resp = client.delete(f"{API}/items/{item.id}", headers=auth_headers(world.admin))
    assert resp.status_code == 409
