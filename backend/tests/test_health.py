from __future__ import annotations

from sqlalchemy.exc import OperationalError

from payslip_api.db.session import get_session
from payslip_api.main import app


class UnreachableSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_healthcheck_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] is True
    assert body["uptime"] >= 0


def test_healthcheck_degraded_when_database_unreachable(client):
    app.dependency_overrides[get_session] = lambda: UnreachableSession()

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] is False


def test_root_banner(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Payslip API running"
