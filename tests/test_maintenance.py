# path: tests/test_maintenance.py
from __future__ import annotations

from .conftest import API, auth_headers


def _open_ticket(client, world, **kw) -> dict:
    body = {"equipment": "Oscilloscope", "problem_description": "No signal on CH2"}
    body.update(kw)
    resp = client.post(f"{API}/maintenance", json=body, headers=auth_headers(world.tech))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_defaults_to_caller_and_queue_is_oldest_first(client, world):
    first = _open_ticket(client, world, ticket_number="M-1")
    second = _open_ticket(client, world, equipment="Soldering station")

    assert first["status"] == "pending"
    assert first["technician_id"] == world.tech.id

    queue = client.get(f"{API}/maintenance", headers=auth_headers(world.manager)).json()
    assert [t["id"] for t in queue] == [first["id"], second["id"]]
    assert queue[0]["technician"]["full_name"] == "Tech"


def test_start_and_finish(client, world):
    ticket = _open_ticket(client, world)
    headers = auth_headers(world.electronics_tech)

    started = client.patch(f"{API}/maintenance/{ticket['id']}/start", headers=headers)
    assert started.status_code == 200
    assert started.json()["status"] == "in_progress"
    assert started.json()["technician_id"] == world.electronics_tech.id

    no_report = client.patch(f"{API}/maintenance/{ticket['id']}/finish", json={"technical_report": "   "}, headers=headers)
    assert no_report.status_code == 400

    missing_field = client.patch(f"{API}/maintenance/{ticket['id']}/finish", json={}, headers=headers)
    assert missing_field.status_code == 400

    finished = client.patch(
        f"{API}/maintenance/{ticket['id']}/finish",
        json={"technical_report": "Replaced op-amp U4"},
        headers=headers,
    )
    assert finished.status_code == 200
    assert finished.json()["status"] == "done"
    assert finished.json()["technical_report"] == "Replaced op-amp U4"


def test_status_patch_validation_and_gating(client, world):
    ticket = _open_ticket(client, world)

    denied = client.patch(f"{API}/maintenance/{ticket['id']}/status", json={"status": "done"}, headers=auth_headers(world.tech))
    assert denied.status_code == 403

    headers = auth_headers(world.admin)
    invalid = client.patch(f"{API}/maintenance/{ticket['id']}/status", json={"status": "exploded"}, headers=headers)
    assert invalid.status_code == 400

    ok = client.patch(f"{API}/maintenance/{ticket['id']}/status", json={"status": "in_progress"}, headers=headers)
    assert ok.status_code == 200
    assert ok.json()["status"] == "in_progress"

    missing = client.patch(f"{API}/maintenance/9999/start", headers=headers)
    assert missing.status_code == 404
