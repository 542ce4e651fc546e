from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from payslip_api.core.logging import get_logger
from payslip_api.db.session import get_session

from . import service
from .errors import (
    DuplicatePayslipError,
    EmployeeMismatchError,
    PayslipNotFoundError,
    PayslipValidationError,
)
from .periods import parse_period_bound
from .repository import Pagination, PayslipFilters, PayslipRepository
from .schemas import FieldError, PaginationMeta, PayslipCreated, PayslipHistory, PayslipOut
from .validation import require_valid_payslip

router = APIRouter(prefix="/api/payslips", tags=["payslips"])
logger = get_logger(__name__)

MAX_PAGE = 100_000


def get_repository(db: Session = Depends(get_session)) -> PayslipRepository:
    return PayslipRepository(db)


def validation_failed(errors: list[FieldError]) -> HTTPException:
    logger.info("payslip_validation_failed", fields=[error.field for error in errors])
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "message": "Validation failed",
            "errors": [error.model_dump() for error in errors],
        },
    )


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        raise validation_failed([FieldError(field="body", message="Request body is required")])
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise validation_failed([FieldError(field="body", message="Request body must be valid JSON")]) from exc


@router.post("", response_model=PayslipCreated, status_code=status.HTTP_201_CREATED)
def create_payslip(
    data: Any = Depends(read_json_body),
    repository: PayslipRepository = Depends(get_repository),
) -> PayslipCreated:
    try:
        payload = require_valid_payslip(data)
    except PayslipValidationError as exc:
        raise validation_failed(exc.errors) from exc

    try:
        payslip = service.create_payslip(repository, payload)
    except DuplicatePayslipError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return PayslipCreated(payslip=PayslipOut.model_validate(payslip))


@router.get("/history", response_model=PayslipHistory)
def payslip_history(
    search: Optional[str] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=10, ge=1, le=100),
    repository: PayslipRepository = Depends(get_repository),
) -> PayslipHistory:
    pagination = Pagination(page=page, limit=limit)
    result = service.list_payslips(
        repository,
        PayslipFilters(search=search, month=month, year=year),
        pagination,
    )
    return PayslipHistory(
        data=[PayslipOut.model_validate(row) for row in result.rows],
        pagination=PaginationMeta(
            total=result.total,
            totalPages=pagination.total_pages(result.total),
            currentPage=page,
            limit=limit,
        ),
    )


@router.get("/{payslip_id}", response_model=PayslipOut)
def read_payslip(payslip_id: str, repository: PayslipRepository = Depends(get_repository)) -> PayslipOut:
    try:
        payslip = service.get_payslip(repository, payslip_id)
    except PayslipNotFoundError as exc:
        logger.info("payslip_not_found", payslip_id=payslip_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PayslipOut.model_validate(payslip)


@router.get("", response_model=list[PayslipOut])
def employee_payslips(
    employee_id: Optional[str] = None,
    employee_email: Optional[str] = None,
    start_month: Optional[str] = None,
    end_month: Optional[str] = None,
    repository: PayslipRepository = Depends(get_repository),
) -> list[PayslipOut]:
    if not employee_id or not employee_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="employee_id and employee_email are required",
        )

    try:
        start = parse_period_bound(start_month) if start_month else None
        end = parse_period_bound(end_month) if end_month else None
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if start and end and start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_month must not be after end_month",
        )

    try:
        rows = service.list_employee_payslips(repository, employee_id.strip(), employee_email, start, end)
    except EmployeeMismatchError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return [PayslipOut.model_validate(row) for row in rows]
