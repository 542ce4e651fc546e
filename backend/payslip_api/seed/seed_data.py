from datetime import date

from sqlalchemy.orm import Session

from payslip_api.domains.payslips.repository import PayslipRepository
from payslip_api.domains.payslips.schemas import PayslipCreate
from payslip_api.domains.payslips.service import create_payslip
from payslip_api.models import Payslip

EMPLOYEES = [
    ("ATS0101", "Ada Lovelace", "ada.lovelace@example.com", "Senior Software Engineer", "Hyderabad"),
    ("ATS0102", "Alan Turing", "alan.turing@example.in", "Software Engineer", "Bangalore"),
    ("ATS0103", "Grace Hopper", "grace.hopper@example.org", "Project Manager", "Pune"),
]

MONTHS = ["January 2025", "February 2025", "March 2025"]


def sample_payload(employee_id: str, month_year: str, **overrides) -> PayslipCreate:
    employee = next((e for e in EMPLOYEES if e[0] == employee_id), EMPLOYEES[0])
    values = {
        "employee_id": employee_id,
        "employee_name": employee[1],
        "employee_email": employee[2],
        "month_year": month_year,
        "designation": employee[3],
        "office_location": employee[4],
        "employment_type": "Permanent",
        "date_of_joining": date(2021, 6, 1),
        "working_days": 22,
        "bank_name": "State Bank of India",
        "pan_no": "ABCDE1234F",
        "bank_account_no": "123456789012",
        "pf_no": "APHYD00123450000012345",
        "uan_no": "100200300400",
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
    values.update(overrides)
    return PayslipCreate.model_validate(values)


def seed(session: Session) -> list[Payslip]:
    repository = PayslipRepository(session)
    created = []
    for month_year in MONTHS:
        for employee_id, *_ in EMPLOYEES:
            created.append(create_payslip(repository, sample_payload(employee_id, month_year)))
    return created
