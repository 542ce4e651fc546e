from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from .errors import PayslipValidationError
from .schemas import FieldError, PayslipCreate


def _message(error: dict[str, Any], field: str) -> str:
    if error["type"] == "missing":
        return f"{field} is required"
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return f"{field}: {error['msg']}"


def validate_payslip(data: Any) -> tuple[Optional[PayslipCreate], list[FieldError]]:
    """Check a raw payslip payload against every field rule.

    All violations are collected, in field declaration order. Returns the
    parsed payload with an empty error list, or ``None`` with the errors.
    """
    if not isinstance(data, dict):
        return None, [FieldError(field="body", message="Request body must be a JSON object")]

    try:
        payload = PayslipCreate.model_validate(data)
    except ValidationError as exc:
        errors = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "body"
            errors.append(FieldError(field=field, message=_message(error, field)))
        return None, errors
    return payload, []


def require_valid_payslip(data: Any) -> PayslipCreate:
    payload, errors = validate_payslip(data)
    if errors:
        raise PayslipValidationError(errors)
    return payload
