from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from payslip_api.models.payslip import Payslip

from .periods import PayPeriod

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


@dataclass
class PayslipFilters:
    search: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None


@dataclass
class Pagination:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


@dataclass
class PayslipPage:
    rows: List[Payslip]
    total: int


class PayslipRepository:
    """Query layer over the ``payslips`` table for one unit of work."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, employee_id: str, month_year: str) -> bool:
        query = self.session.query(Payslip.payslip_id).filter(
            Payslip.employee_id == employee_id,
            Payslip.month_year == month_year,
        )
        return self.session.query(query.exists()).scalar()

    def add(self, payslip: Payslip) -> Payslip:
        self.session.add(payslip)
        self.session.flush()
        return payslip

    def get(self, payslip_id: str) -> Optional[Payslip]:
        return self.session.query(Payslip).filter(Payslip.payslip_id == payslip_id).one_or_none()

    def list(self, filters: PayslipFilters, pagination: Pagination) -> PayslipPage:
        query = self.session.query(Payslip)
        if filters.search:
            pattern = f"%{escape_like(filters.search.strip())}%"
            query = query.filter(
                or_(
                    Payslip.employee_id.ilike(pattern, escape=LIKE_ESCAPE),
                    Payslip.employee_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if filters.month:
            query = query.filter(Payslip.period_month == filters.month)
        if filters.year:
            query = query.filter(Payslip.period_year == filters.year)

        total = query.count()
        rows = (
            query.order_by(
                Payslip.period_year.desc(),
                Payslip.period_month.desc(),
                Payslip.employee_id.asc(),
            )
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return PayslipPage(rows=rows, total=total)

    def has_employee(self, employee_id: str, employee_email: str) -> bool:
        query = self.session.query(Payslip.payslip_id).filter(
            Payslip.employee_id == employee_id,
            func.lower(Payslip.employee_email) == employee_email.strip().lower(),
        )
        return self.session.query(query.exists()).scalar()

    def list_for_employee(
        self,
        employee_id: str,
        start: Optional[PayPeriod] = None,
        end: Optional[PayPeriod] = None,
    ) -> List[Payslip]:
        period = Payslip.period_year * 100 + Payslip.period_month
        query = self.session.query(Payslip).filter(Payslip.employee_id == employee_id)
        if start:
            query = query.filter(period >= start.ordinal)
        if end:
            query = query.filter(period <= end.ordinal)
        return query.order_by(Payslip.period_year.desc(), Payslip.period_month.desc()).all()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def refresh(self, payslip: Payslip) -> Payslip:
        self.session.refresh(payslip)
        return payslip
