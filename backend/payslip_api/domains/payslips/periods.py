from __future__ import annotations

import calendar
import re
from dataclasses import dataclass

MONTH_YEAR_PATTERN = re.compile(r"^[A-Za-z]+\s[0-9]{4}$")
ISO_MONTH_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{2})$")

_MONTHS = {name.lower(): index for index, name in enumerate(calendar.month_name) if name}
_MONTHS.update({name.lower(): index for index, name in enumerate(calendar.month_abbr) if name})


@dataclass(frozen=True, order=True)
class PayPeriod:
    year: int
    month: int

    @property
    def ordinal(self) -> int:
        return self.year * 100 + self.month

    @property
    def label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year:04d}"

    def __str__(self) -> str:
        return self.label


def parse_month_year(value: str) -> PayPeriod:
    """Parse ``"March 2025"`` (or ``"Mar 2025"``) into a pay period.

    Raises ``ValueError`` for anything else.
    """
    if not MONTH_YEAR_PATTERN.fullmatch(value):
        raise ValueError('Month/Year must be in "Month YYYY" format')
    month_name, year = value.split()
    month = _MONTHS.get(month_name.lower())
    if month is None:
        raise ValueError(f"Unknown month name: {month_name}")
    if int(year) < 1:
        raise ValueError(f"Invalid year in period: {year}")
    return PayPeriod(year=int(year), month=month)


def parse_period_bound(value: str) -> PayPeriod:
    """Parse a range bound given either as ``"YYYY-MM"`` or ``"Month YYYY"``."""
    value = value.strip()
    match = ISO_MONTH_PATTERN.fullmatch(value)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month in period: {value}")
        if year < 1:
            raise ValueError(f"Invalid year in period: {value}")
        return PayPeriod(year=year, month=month)
    return parse_month_year(value)
