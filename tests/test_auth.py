# path: tests/test_auth.py
from __future__ import annotations

from passlib.hash import argon2
from sqlalchemy import select

from assetdesk.core.models import User
from assetdesk.core.roles import Role
from assetdesk.core.security import decode_token, pwd_context

from .conftest import API, PASSWORD, auth_headers


def test_login_returns_token_and_user(client, world):
    resp = client.post(f"{API}/auth/login", json={"username": "tech", "password": PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"] == {"id": world.tech.id, "full_name": "Tech", "role": "technician"}

    claims = decode_token(body["access_token"])
    assert claims["sub"] == str(world.tech.id)
    assert claims["role"] == "technician"
    assert claims["unit_id"] == world.main.id


def test_login_rejects_wrong_password_and_unknown_user(client, world):
    wrong = client.post(f"{API}/auth/login", json={"username": "tech", "password": "nope-nope"})
    unknown = client.post(f"{API}/auth/login", json={"username": "ghost", "password": PASSWORD})

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    # одно и то же сообщение: нельзя узнать, существует ли пользователь
    assert wrong.json()["detail"] == unknown.json()["detail"]


def test_login_missing_fields_is_400(client, world):
    resp = client.post(f"{API}/auth/login", json={"username": "tech"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid data"


def test_oauth2_token_form(client, world):
    resp = client.post(f"{API}/auth/token", data={"username": "admin", "password": PASSWORD})

    assert resp.status_code == 200
    assert resp.json()["token_type"] == "bearer"


def test_legacy_argon2_hash_is_upgraded_on_login(client, seed, db_session):
    """
    GIVEN пользователь с хэшем в старой схеме (argon2)
    WHEN он логинится верным паролем
    THEN хэш в БД заменён на текущую схему, и повторный логин тоже успешен
    """
    legacy = argon2.hash("legacy-pass")
    user = seed.user("old_timer", Role.TECHNICIAN, hashed_password=legacy)
    assert pwd_context.needs_update(legacy)

    first = client.post(f"{API}/auth/login", json={"username": "old_timer", "password": "legacy-pass"})
    assert first.status_code == 200

    db_session.expire_all()
    stored = db_session.execute(select(User.hashed_password).where(User.id == user.id)).scalar_one()
    assert stored != legacy
    assert pwd_context.identify(stored) == "bcrypt_sha256"
    assert not pwd_context.needs_update(stored)

    second = client.post(f"{API}/auth/login", json={"username": "old_timer", "password": "legacy-pass"})
    assert second.status_code == 200


def test_legacy_hash_untouched_on_wrong_password(client, seed, db_session):
    legacy = argon2.hash("legacy-pass")
    user = seed.user("old_timer", Role.TECHNICIAN, hashed_password=legacy)

    resp = client.post(f"{API}/auth/login", json={"username": "old_timer", "password": "wrong-pass"})
    assert resp.status_code == 401

    db_session.expire_all()
    stored = db_session.execute(select(User.hashed_password).where(User.id == user.id)).scalar_one()
    assert stored == legacy


def test_change_password(client, world):
    headers = auth_headers(world.tech)

    bad = client.put(
        f"{API}/auth/change-password",
        json={"current_password": "not-it", "new_password": "brand-new"},
        headers=headers,
    )
    assert bad.status_code == 401

    short = client.put(
        f"{API}/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "123"},
        headers=headers,
    )
    assert short.status_code == 400

    ok = client.put(
        f"{API}/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "brand-new"},
        headers=headers,
    )
    assert ok.status_code == 200

    login = client.post(f"{API}/auth/login", json={"username": "tech", "password": "brand-new"})
    assert login.status_code == 200


def test_missing_or_bad_token_is_401(client, world):
    no_token = client.get(f"{API}/items")
    bad_token = client.get(f"{API}/items", headers={"Authorization": "Bearer not-a-jwt"})

    assert no_token.status_code == 401
    assert no_token.headers["www-authenticate"] == "Bearer"
    assert bad_token.status_code == 401


def test_insufficient_role_is_403(client, world):
    resp = client.get(f"{API}/units", headers=auth_headers(world.manager))
    assert resp.status_code == 403

    resp = client.get(f"{API}/reports/global-stats", headers=auth_headers(world.tech))
    assert resp.status_code == 403

    resp = client.get(f"{API}/units", headers=auth_headers(world.admin))
    assert resp.status_code == 200
