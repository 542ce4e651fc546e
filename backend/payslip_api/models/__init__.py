from .payslip import Payslip

__all__ = ["Payslip"]
