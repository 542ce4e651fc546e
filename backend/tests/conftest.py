from __future__ import annotations

import os

# Must be set before the application modules build their engine.
os.environ["PAYSLIP_DATABASE_URL"] = "sqlite://"
os.environ.setdefault("PAYSLIP_LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from payslip_api.db.session import Base, SessionLocal, engine
from payslip_api.main import app


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def payload() -> dict:
    return {
        "employee_id": "ATS0123",
        "employee_name": "Priya Sharma",
        "employee_email": "priya.sharma@example.com",
        "month_year": "March 2025",
        "designation": "Software Engineer",
        "office_location": "Hyderabad",
        "employment_type": "Permanent",
        "date_of_joining": "2022-04-18",
        "working_days": 22,
        "bank_name": "HDFC Bank",
        "pan_no": "ABCDE1234F",
        "bank_account_no": "50100234567890",
        "pf_no": "APHYD0012345000001",
        "uan_no": "101234567890",
        "esic_no": "3100123456",
        "basic_salary": 50000,
        "hra": 20000,
        "other_allowance": 5000,
        "professional_tax": 200,
        "tds": 4500,
        "provident_fund": 1800,
        "lwp": 0,
        "other_deduction": 500,
    }
