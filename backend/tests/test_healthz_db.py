import uuid

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app
from app import main as app_main
from app.repositories.days_goal_repo import DaysGoalRepository
from app.security import create_access_token

client = TestClient(app)

def test_healthz_ok_against_test_db():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_healthz_degraded_when_store_unreachable(monkeypatch):
    class Down:
        def __enter__(self): raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        def __exit__(self, *a): return False
    monkeypatch.setattr(app_main, "SessionLocal", lambda: Down())
    body = client.get("/healthz").json()
    assert body["status"] == "degraded"
    assert "connection refused" in body["error"]

def test_store_failure_inside_route_is_503(monkeypatch):
    uid = f"u_{uuid.uuid4().hex[:10]}"
    h = {"Authorization": f"Bearer {create_access_token(uid)}"}
    client.post("/users", headers=h, json={"id": uid, "email": f"{uid}@ex.com", "displayName": "Lifter", "username": uid})

    def fail(self, user_id):
        raise OperationalError("SELECT days_goals", {}, Exception("server closed the connection"))
    monkeypatch.setattr(DaysGoalRepository, "get_for_user", fail)

    r = client.get("/goals/days", headers=h)
    assert r.status_code == 503
    assert r.json() == {"detail": "store operation failed"}
