from __future__ import annotations

from .schemas import FieldError


class PayslipError(Exception):
    """Base class for payslip domain failures."""


class PayslipValidationError(PayslipError):
    def __init__(self, errors: list[FieldError]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class DuplicatePayslipError(PayslipError):
    def __init__(self, employee_id: str, month_year: str):
        super().__init__("Payslip already exists for this employee and month/year")
        self.employee_id = employee_id
        self.month_year = month_year


class PayslipNotFoundError(PayslipError):
    def __init__(self, payslip_id: str):
        super().__init__("Payslip not found")
        self.payslip_id = payslip_id


class EmployeeMismatchError(PayslipError):
    def __init__(self, employee_id: str):
        super().__init__("Employee ID and email do not match any payslip records")
        self.employee_id = employee_id


class PayslipIdExhaustedError(PayslipError):
    def __init__(self, attempts: int):
        super().__init__(f"Could not allocate a unique payslip id after {attempts} attempts")
        self.attempts = attempts
