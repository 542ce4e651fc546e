from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from payslip_api.core.config import get_settings

from .calculator import quantize, to_decimal
from .components import component_names, get_component
from .periods import parse_month_year

EMPLOYEE_ID_PATTERN = re.compile(r"^ATS0[0-9]{3}$")
NAME_PATTERN = re.compile(r"^[a-zA-Z]+(?:\s[a-zA-Z]+)*$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.(com|in|org|co\.in)$", re.IGNORECASE)
BANK_NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
ACCOUNT_PATTERN = re.compile(r"^[0-9]{10,18}$")
PF_PATTERN = re.compile(r"^[A-Z0-9]{12,22}$")
UAN_PATTERN = re.compile(r"^[0-9]{12}$")
ESIC_PATTERN = re.compile(r"^[A-Z0-9]{10,17}$")

MONEY_FIELDS = component_names()
# Largest value a NUMERIC(10, 2) column holds
MAX_AMOUNT = 99_999_999.99


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


class PayslipCreate(BaseModel):
    """Inbound payslip payload.

    Derived fields (net salary, totals, identifier, status) are not accepted
    from the caller; unknown keys are ignored. String fields are checked as
    sent, without trimming surrounding whitespace.
    """

    model_config = ConfigDict(extra="ignore")

    employee_id: str
    employee_name: str
    employee_email: str
    month_year: str
    designation: str
    office_location: str
    employment_type: str
    date_of_joining: date
    working_days: int
    bank_name: str
    pan_no: str
    bank_account_no: str
    pf_no: str
    uan_no: str
    esic_no: str

    basic_salary: float
    hra: float
    da: float = 0
    other_allowance: float
    wage_allowance: float = 0
    medical_allowance: float = 0
    professional_tax: float
    tds: float
    provident_fund: float
    lwp: float
    other_deduction: float
    special_deduction: float = 0

    @field_validator("employee_id")
    @classmethod
    def validate_employee_id(cls, value: str) -> str:
        if not EMPLOYEE_ID_PATTERN.fullmatch(value) or value == "ATS0000":
            raise ValueError("Employee ID must be ATS0 followed by 3 digits (not 000)")
        return value

    @field_validator("employee_name")
    @classmethod
    def validate_employee_name(cls, value: str) -> str:
        if len(value) < 3 or not NAME_PATTERN.fullmatch(value):
            raise ValueError("Name must be at least 3 characters of letters and single spaces")
        return value

    @field_validator("employee_email")
    @classmethod
    def validate_employee_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("Invalid email format")
        return value

    @field_validator("month_year")
    @classmethod
    def validate_month_year(cls, value: str) -> str:
        return parse_month_year(value).label

    @field_validator("designation")
    @classmethod
    def validate_designation(cls, value: str) -> str:
        allowed = get_settings().designations
        if value not in allowed:
            raise ValueError(f"Designation must be one of: {', '.join(allowed)}")
        return value

    @field_validator("office_location")
    @classmethod
    def validate_office_location(cls, value: str) -> str:
        allowed = get_settings().office_locations
        if value not in allowed:
            raise ValueError(f"Office location must be one of: {', '.join(allowed)}")
        return value

    @field_validator("employment_type")
    @classmethod
    def validate_employment_type(cls, value: str) -> str:
        allowed = get_settings().employment_types
        if value not in allowed:
            raise ValueError(f"Employment type must be one of: {', '.join(allowed)}")
        return value

    @field_validator("date_of_joining")
    @classmethod
    def validate_date_of_joining(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("Date of joining cannot be in the future")
        return value

    @field_validator("working_days", mode="before")
    @classmethod
    def validate_working_days(cls, value: Any) -> int:
        if not _is_number(value) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError("Working days must be a whole number")
        if not 1 <= value <= 31:
            raise ValueError("Working days must be between 1 and 31")
        return int(value)

    @field_validator("bank_name")
    @classmethod
    def validate_bank_name(cls, value: str) -> str:
        if not BANK_NAME_PATTERN.fullmatch(value):
            raise ValueError("Bank name must contain letters and spaces only")
        return value

    @field_validator("pan_no")
    @classmethod
    def validate_pan_no(cls, value: str) -> str:
        if not PAN_PATTERN.fullmatch(value):
            raise ValueError("PAN must be 5 letters, 4 digits, 1 letter")
        return value

    @field_validator("bank_account_no")
    @classmethod
    def validate_bank_account_no(cls, value: str) -> str:
        if not ACCOUNT_PATTERN.fullmatch(value):
            raise ValueError("Bank account number must be 10-18 digits")
        return value

    @field_validator("pf_no")
    @classmethod
    def validate_pf_no(cls, value: str) -> str:
        if not PF_PATTERN.fullmatch(value):
            raise ValueError("PF number must be 12-22 alphanumeric characters")
        return value

    @field_validator("uan_no")
    @classmethod
    def validate_uan_no(cls, value: str) -> str:
        if not UAN_PATTERN.fullmatch(value):
            raise ValueError("UAN must be exactly 12 digits")
        return value

    @field_validator("esic_no")
    @classmethod
    def validate_esic_no(cls, value: str) -> str:
        if not ESIC_PATTERN.fullmatch(value):
            raise ValueError("ESIC number must be 10-17 alphanumeric characters")
        return value

    @field_validator(*MONEY_FIELDS, mode="before")
    @classmethod
    def validate_amount(cls, value: Any, info: ValidationInfo) -> float:
        component = get_component(info.field_name)
        if not _is_number(value):
            raise ValueError(f"{info.field_name} must be a number")
        if component.allow_zero and value < 0:
            raise ValueError(f"{info.field_name} must be a non-negative number")
        if not component.allow_zero and value <= 0:
            raise ValueError(f"{info.field_name} must be a positive number")
        if value > MAX_AMOUNT:
            raise ValueError(f"{info.field_name} must not exceed {MAX_AMOUNT:,.2f}")
        # after the ceiling check, so quantize stays within Decimal precision
        if to_decimal(value) != quantize(to_decimal(value)):
            raise ValueError(f"{info.field_name} must have at most 2 decimal places")
        return value

    def component_amounts(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in MONEY_FIELDS}


class PayslipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payslip_id: str
    employee_id: str
    employee_name: str
    employee_email: str
    month_year: str
    designation: str
    office_location: str
    employment_type: str
    date_of_joining: date
    working_days: int
    bank_name: str
    pan_no: str
    bank_account_no: str
    pf_no: str
    uan_no: str
    esic_no: str

    basic_salary: float
    hra: float
    da: float
    other_allowance: float
    wage_allowance: float
    medical_allowance: float
    professional_tax: float
    tds: float
    provident_fund: float
    lwp: float
    other_deduction: float
    special_deduction: float

    gross_earnings: float
    total_deductions: float
    net_salary: float
    status: str
    created_at: datetime
    updated_at: datetime


class PayslipCreated(BaseModel):
    message: str = "Payslip generated successfully"
    payslip: PayslipOut


class PaginationMeta(BaseModel):
    total: int
    totalPages: int
    currentPage: int
    limit: int


class PayslipHistory(BaseModel):
    data: list[PayslipOut]
    pagination: PaginationMeta


class FieldError(BaseModel):
    field: str
    message: str
