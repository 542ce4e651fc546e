from __future__ import annotations

import re
from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from payslip_api.domains.payslips.router import get_repository
from payslip_api.main import app
from payslip_api.models import Payslip


def _count(db_session) -> int:
    return db_session.query(Payslip).count()


def test_create_payslip_computes_net_salary(client, payload):
    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Payslip generated successfully"
    payslip = body["payslip"]
    assert re.fullmatch(r"PSL-MARCH2025-[1-9][0-9]{2}", payslip["payslip_id"])
    assert payslip["gross_earnings"] == 75000
    assert payslip["total_deductions"] == 7000
    assert payslip["net_salary"] == 68000
    assert payslip["status"] == "Generated"
    assert payslip["da"] == 0
    assert payslip["created_at"]


def test_create_ignores_client_supplied_net_salary(client, payload):
    payload["net_salary"] = 1
    payload["status"] = "Paid"

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 201
    assert response.json()["payslip"]["net_salary"] == 68000
    assert response.json()["payslip"]["status"] == "Generated"


def test_create_includes_optional_components(client, payload):
    payload.update({"da": 1500, "medical_allowance": 1250, "special_deduction": 750})

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 201
    assert response.json()["payslip"]["net_salary"] == 68000 + 1500 + 1250 - 750


def test_create_keeps_cents(client, payload):
    payload.update(
        {
            "basic_salary": 1000.1,
            "hra": 200.2,
            "other_allowance": 0.3,
            "professional_tax": 0.1,
            "tds": 0,
            "provident_fund": 0,
            "other_deduction": 0,
        }
    )

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 201
    assert response.json()["payslip"]["net_salary"] == 1200.5


def test_create_normalizes_month_year(client, payload):
    payload["month_year"] = "mar 2025"

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 201
    assert response.json()["payslip"]["month_year"] == "March 2025"


def test_duplicate_payslip_rejected(client, payload, db_session):
    first = client.post("/api/payslips", json=payload)
    payload["month_year"] = "MARCH 2025"
    second = client.post("/api/payslips", json=payload)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["detail"] == "Payslip already exists for this employee and month/year"
    assert _count(db_session) == 1


def test_same_employee_different_month_allowed(client, payload, db_session):
    first = client.post("/api/payslips", json=payload)
    payload["month_year"] = "April 2025"
    second = client.post("/api/payslips", json=payload)

    assert first.status_code == 201
    assert second.status_code == 201
    assert _count(db_session) == 2


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("employee_id", "ATS0000"),
        ("employee_id", "ATS1234"),
        ("employee_id", 123),
        ("employee_name", "Al"),
        ("employee_name", "John  Doe"),
        ("employee_name", "J0hn Doe"),
        ("employee_email", "priya@example.net"),
        ("employee_email", "not-an-email"),
        ("month_year", "2025-03"),
        ("month_year", "Marc 2025"),
        ("month_year", "March 0000"),
        ("month_year", "March 2025\n"),
        ("employee_id", "  ATS0123\n"),
        ("employee_id", "ATS0123\n"),
        ("designation", "CEO"),
        ("office_location", "Chennai"),
        ("employment_type", "Intern"),
        ("date_of_joining", "not-a-date"),
        ("date_of_joining", (date.today() + timedelta(days=30)).isoformat()),
        ("working_days", 0),
        ("working_days", 32),
        ("working_days", 20.5),
        ("working_days", "22"),
        ("bank_name", "HDFC Bank 2"),
        ("pan_no", "abcde1234f"),
        ("pan_no", " ABCDE1234F "),
        ("bank_account_no", "12345"),
        ("pf_no", "PF-123"),
        ("uan_no", "12345678901"),
        ("esic_no", "ESIC"),
        ("basic_salary", 0),
        ("basic_salary", -100),
        ("basic_salary", "50000"),
        ("basic_salary", True),
        ("basic_salary", 0.001),
        ("hra", 10.005),
        ("hra", -1),
        ("tds", "abc"),
        ("lwp", None),
    ],
)
def test_single_field_violation_rejected(client, payload, db_session, field, value):
    payload[field] = value

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Validation failed"
    assert [error["field"] for error in detail["errors"]] == [field]
    assert _count(db_session) == 0


def test_missing_field_reported(client, payload):
    del payload["uan_no"]

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["errors"] == [{"field": "uan_no", "message": "uan_no is required"}]


def test_all_violations_collected_in_field_order(client, payload):
    payload.update({"pan_no": "bad", "employee_id": "ATS0000", "hra": -5, "working_days": 40})

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 400
    fields = [error["field"] for error in response.json()["detail"]["errors"]]
    assert fields == ["employee_id", "working_days", "pan_no", "hra"]


def test_non_object_body_rejected(client):
    response = client.post("/api/payslips", json=[1, 2, 3])

    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "body"


def test_create_keeps_four_digit_year(client, payload):
    payload["month_year"] = "March 0999"

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 201
    assert response.json()["payslip"]["month_year"] == "March 0999"


def test_sub_cent_basic_salary_rejected(client, payload, db_session):
    payload["basic_salary"] = 0.001

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["errors"] == [
        {"field": "basic_salary", "message": "basic_salary must have at most 2 decimal places"}
    ]
    assert _count(db_session) == 0


@pytest.mark.parametrize(
    ("content", "message"),
    [
        (b"{\"employee_id\": \"ATS0123\",", "Request body must be valid JSON"),
        (b"\xff\xfe", "Request body must be valid JSON"),
        (b"", "Request body is required"),
    ],
)
def test_unreadable_body_rejected(client, db_session, content, message):
    response = client.post("/api/payslips", content=content, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "message": "Validation failed",
        "errors": [{"field": "body", "message": message}],
    }
    assert _count(db_session) == 0


def test_missing_body_rejected(client):
    response = client.post("/api/payslips")

    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "body"


def test_store_failure_returns_generic_error(client, payload):
    class FailingRepository:
        def exists(self, *args):
            raise OperationalError("SELECT", {}, Exception("password authentication failed"))

    app.dependency_overrides[get_repository] = lambda: FailingRepository()

    response = client.post("/api/payslips", json=payload)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
