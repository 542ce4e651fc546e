from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric, String, Text, UniqueConstraint

from payslip_api.db.session import Base

MONEY = Numeric(10, 2)
TOTAL = Numeric(14, 2)


class Payslip(Base):
    __tablename__ = "payslips"
    __table_args__ = (
        UniqueConstraint("employee_id", "month_year", name="unique_employee_month_year"),
        Index("ix_payslips_period", "period_year", "period_month"),
    )

    payslip_id = Column(String(32), primary_key=True)

    employee_id = Column(String(16), nullable=False, index=True)
    employee_name = Column(Text, nullable=False)
    employee_email = Column(Text, nullable=False)
    designation = Column(Text, nullable=False)
    office_location = Column(Text, nullable=False)
    employment_type = Column(Text, nullable=False)
    date_of_joining = Column(Date, nullable=False)
    working_days = Column(Integer, nullable=False)

    # Canonical "March 2025"; year/month are derived for filtering and ordering
    month_year = Column(String(20), nullable=False)
    period_year = Column(Integer, nullable=False)
    period_month = Column(Integer, nullable=False)

    bank_name = Column(Text, nullable=False)
    pan_no = Column(String(10), nullable=False)
    bank_account_no = Column(String(18), nullable=False)
    pf_no = Column(String(22), nullable=False)
    uan_no = Column(String(12), nullable=False)
    esic_no = Column(String(17), nullable=False)

    # Earnings
    basic_salary = Column(MONEY, nullable=False)
    hra = Column(MONEY, nullable=False, default=0)
    da = Column(MONEY, nullable=False, default=0)
    other_allowance = Column(MONEY, nullable=False, default=0)
    wage_allowance = Column(MONEY, nullable=False, default=0)
    medical_allowance = Column(MONEY, nullable=False, default=0)

    # Deductions
    professional_tax = Column(MONEY, nullable=False, default=0)
    tds = Column(MONEY, nullable=False, default=0)
    provident_fund = Column(MONEY, nullable=False, default=0)
    lwp = Column(MONEY, nullable=False, default=0)
    other_deduction = Column(MONEY, nullable=False, default=0)
    special_deduction = Column(MONEY, nullable=False, default=0)

    gross_earnings = Column(TOTAL, nullable=False)
    total_deductions = Column(TOTAL, nullable=False)
    net_salary = Column(TOTAL, nullable=False)

    status = Column(String(20), nullable=False, default="Generated")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Payslip {self.payslip_id} employee={self.employee_id} period={self.month_year!r}>"
