from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ComponentKind = Literal["earning", "deduction"]


@dataclass(frozen=True)
class PayComponent:
    name: str
    kind: ComponentKind
    required: bool = True
    allow_zero: bool = True

    @property
    def is_earning(self) -> bool:
        return self.kind == "earning"


# Order is the order fields are validated and shown on a payslip.
PAY_COMPONENTS: tuple[PayComponent, ...] = (
    PayComponent("basic_salary", "earning", allow_zero=False),
    PayComponent("hra", "earning"),
    PayComponent("da", "earning", required=False),
    PayComponent("other_allowance", "earning"),
    PayComponent("wage_allowance", "earning", required=False),
    PayComponent("medical_allowance", "earning", required=False),
    PayComponent("professional_tax", "deduction"),
    PayComponent("tds", "deduction"),
    PayComponent("provident_fund", "deduction"),
    PayComponent("lwp", "deduction"),
    PayComponent("other_deduction", "deduction"),
    PayComponent("special_deduction", "deduction", required=False),
)


def component_names(components: tuple[PayComponent, ...] = PAY_COMPONENTS) -> tuple[str, ...]:
    return tuple(component.name for component in components)


def get_component(name: str, components: tuple[PayComponent, ...] = PAY_COMPONENTS) -> PayComponent:
    for component in components:
        if component.name == name:
            return component
    raise KeyError(name)


def earnings(components: tuple[PayComponent, ...] = PAY_COMPONENTS) -> tuple[PayComponent, ...]:
    return tuple(c for c in components if c.is_earning)


def deductions(components: tuple[PayComponent, ...] = PAY_COMPONENTS) -> tuple[PayComponent, ...]:
    return tuple(c for c in components if not c.is_earning)
