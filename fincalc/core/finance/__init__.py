# fincalc/core/finance/__init__.py

from .amortization import (
    AmortizationRow,
    build_amortization_table,
    french_closed_form_balances,
    french_payment,
    summarize_table,
    total_periods,
)
from .solver import formula_template, required_knowns, solve

__all__ = [
    "solve",
    "required_knowns",
    "formula_template",
    "AmortizationRow",
    "build_amortization_table",
    "french_closed_form_balances",
    "french_payment",
    "summarize_table",
    "total_periods",
]
