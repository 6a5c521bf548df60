from fastapi.testclient import TestClient
from app.main import app
from app.security import create_access_token
import uuid

client = TestClient(app)

def make_user():
    uid = f"u_{uuid.uuid4().hex[:10]}"
    token = create_access_token(uid)
    r = client.post(
        "/users",
        headers={"Authorization": f"Bearer {token}"},
        json={"id": uid, "email": f"{uid}@ex.com", "displayName": "Y", "username": uid},
    )
    assert r.status_code == 201, r.text
    return uid, token

def test_me_roundtrip():
    uid, token = make_user()
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == uid
    assert body["displayName"] == "Y"
    assert "createdAt" in body

def test_token_expired():
    uid, _ = make_user()
    expired = create_access_token(uid, expires_minutes=-1)
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token expired"

def test_missing_token():
    assert client.get("/auth/me").status_code == 401
    assert client.get("/posts").status_code == 401

def test_garbage_token():
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

def test_token_for_unknown_user():
    token = create_access_token(f"ghost_{uuid.uuid4().hex[:8]}")
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401

def test_profile_only_for_own_identity():
    token = create_access_token("someone-else")
    r = client.post(
        "/users",
        headers={"Authorization": f"Bearer {token}"},
        json={"id": "not-me", "email": "not-me@ex.com", "displayName": "N", "username": "n"},
    )
    assert r.status_code == 403

def test_duplicate_profile_400():
    uid, token = make_user()
    r = client.post(
        "/users",
        headers={"Authorization": f"Bearer {token}"},
        json={"id": uid, "email": f"{uid}@ex.com", "displayName": "Y", "username": uid},
    )
    assert r.status_code == 400
    assert "already" in r.json()["detail"]

def test_bad_email_422():
    uid = f"u_{uuid.uuid4().hex[:10]}"
    token = create_access_token(uid)
    r = client.post(
        "/users",
        headers={"Authorization": f"Bearer {token}"},
        json={"id": uid, "email": "not-an-email", "displayName": "Y", "username": uid},
    )
    assert r.status_code == 422
