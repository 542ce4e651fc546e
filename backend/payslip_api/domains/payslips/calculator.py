from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Union

from .components import PAY_COMPONENTS, PayComponent

Amount = Union[int, float, Decimal]
CENT = Decimal("0.01")


def to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the literal the client sent instead of the binary float
    return Decimal(str(value))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class SalaryBreakdown:
    gross_earnings: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    def quantized(self) -> "SalaryBreakdown":
        """Round every total to the stored precision."""
        return SalaryBreakdown(
            gross_earnings=quantize(self.gross_earnings),
            total_deductions=quantize(self.total_deductions),
            net_salary=quantize(self.net_salary),
        )


def calculate_salary(
    amounts: Mapping[str, Amount],
    components: tuple[PayComponent, ...] = PAY_COMPONENTS,
) -> SalaryBreakdown:
    """Compute net salary as total earnings minus total deductions.

    Components missing from ``amounts`` count as zero. No rounding is applied;
    callers round once when persisting.
    """
    gross = Decimal("0")
    deducted = Decimal("0")
    for component in components:
        value = to_decimal(amounts.get(component.name) or 0)
        if component.is_earning:
            gross += value
        else:
            deducted += value
    return SalaryBreakdown(gross_earnings=gross, total_deductions=deducted, net_salary=gross - deducted)
