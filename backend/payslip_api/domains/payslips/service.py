from __future__ import annotations

from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError

from payslip_api.core.config import settings
from payslip_api.core.logging import get_logger
from payslip_api.core.observability import get_meter, get_tracer
from payslip_api.models.payslip import Payslip

from .calculator import calculate_salary, quantize, to_decimal
from .errors import (
    DuplicatePayslipError,
    EmployeeMismatchError,
    PayslipIdExhaustedError,
    PayslipNotFoundError,
)
from .identifiers import generate_payslip_id
from .periods import PayPeriod, parse_month_year
from .repository import Pagination, PayslipFilters, PayslipPage, PayslipRepository
from .schemas import MONEY_FIELDS, PayslipCreate

logger = get_logger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

payslips_created = meter.create_counter("payslips.created", description="Payslips persisted")
payslips_rejected = meter.create_counter("payslips.rejected", description="Payslip creations refused")

IdFactory = Callable[[str], str]


def _default_id_factory(month_year: str) -> str:
    return generate_payslip_id(month_year, prefix=settings.payslip_id_prefix)


def build_payslip(payslip_id: str, payload: PayslipCreate) -> Payslip:
    period = parse_month_year(payload.month_year)
    breakdown = calculate_salary(payload.component_amounts()).quantized()
    fields = payload.model_dump()
    for name in MONEY_FIELDS:
        fields[name] = quantize(to_decimal(fields[name]))
    return Payslip(
        payslip_id=payslip_id,
        period_year=period.year,
        period_month=period.month,
        gross_earnings=breakdown.gross_earnings,
        total_deductions=breakdown.total_deductions,
        net_salary=breakdown.net_salary,
        status="Generated",
        **fields,
    )


def create_payslip(
    repository: PayslipRepository,
    payload: PayslipCreate,
    *,
    id_factory: Optional[IdFactory] = None,
    attempts: Optional[int] = None,
) -> Payslip:
    """Persist a validated payslip, retrying on identifier collisions.

    The ``unique_employee_month_year`` constraint is the duplicate guard; the
    pre-checks only yield a friendlier error in the common case. An insert
    that fails for any other constraint is taken as an identifier collision.
    """
    id_factory = id_factory or _default_id_factory
    attempts = attempts or settings.payslip_id_attempts

    with tracer.start_as_current_span("payslips.create") as span:
        span.set_attribute("payslip.employee_id", payload.employee_id)
        span.set_attribute("payslip.month_year", payload.month_year)

        if repository.exists(payload.employee_id, payload.month_year):
            payslips_rejected.add(1, {"reason": "duplicate"})
            logger.info("payslip_duplicate", employee_id=payload.employee_id, month_year=payload.month_year)
            raise DuplicatePayslipError(payload.employee_id, payload.month_year)

        for attempt in range(1, attempts + 1):
            payslip_id = id_factory(payload.month_year)
            if repository.get(payslip_id) is not None:
                logger.warning("payslip_id_collision", payslip_id=payslip_id, attempt=attempt)
                continue

            payslip = build_payslip(payslip_id, payload)
            try:
                repository.add(payslip)
                repository.commit()
            except IntegrityError:
                repository.rollback()
                if repository.exists(payload.employee_id, payload.month_year):
                    payslips_rejected.add(1, {"reason": "duplicate"})
                    logger.info(
                        "payslip_duplicate",
                        employee_id=payload.employee_id,
                        month_year=payload.month_year,
                        detected="constraint",
                    )
                    raise DuplicatePayslipError(payload.employee_id, payload.month_year)
                logger.warning("payslip_id_collision", payslip_id=payslip_id, attempt=attempt)
                continue

            repository.refresh(payslip)
            payslips_created.add(1, {"office_location": payslip.office_location})
            span.set_attribute("payslip.id", payslip.payslip_id)
            logger.info(
                "payslip_created",
                payslip_id=payslip.payslip_id,
                employee_id=payslip.employee_id,
                month_year=payslip.month_year,
            )
            return payslip

        payslips_rejected.add(1, {"reason": "id_exhausted"})
        raise PayslipIdExhaustedError(attempts)


def get_payslip(repository: PayslipRepository, payslip_id: str) -> Payslip:
    payslip = repository.get(payslip_id)
    if payslip is None:
        raise PayslipNotFoundError(payslip_id)
    return payslip


def list_payslips(
    repository: PayslipRepository, filters: PayslipFilters, pagination: Pagination
) -> PayslipPage:
    page = repository.list(filters, pagination)
    logger.info("payslips_listed", count=len(page.rows), total=page.total, page=pagination.page)
    return page


def list_employee_payslips(
    repository: PayslipRepository,
    employee_id: str,
    employee_email: str,
    start: Optional[PayPeriod] = None,
    end: Optional[PayPeriod] = None,
) -> List[Payslip]:
    if not repository.has_employee(employee_id, employee_email):
        logger.warning("employee_mismatch", employee_id=employee_id)
        raise EmployeeMismatchError(employee_id)
    return repository.list_for_employee(employee_id, start, end)
