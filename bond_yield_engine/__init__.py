"""
Bond Yield Engine

Modules:
- bonds: bond parameters + semiannual cash-flow generation
- ytm: present value + bisection/brentq yield solver (BEY, EAR)
- cache: memoisation of yield results keyed on the input tuple
- validation: field-level input checks
- calculator: validate -> cache -> solve facade
- portfolio: batch solving over a DataFrame of bonds
- chart: chart series + display formatting
- config: validation limits + solver settings
"""
from .bonds import BondParameters, InvalidScheduleError, generate_cashflows, period_count
from .cache import YieldCache
from .calculator import YieldCalculator
from .config import SolverConfig, ValidationLimits
from .validation import InvalidBondInputError, validate_inputs, validate_or_raise
from .ytm import YieldResult, present_value, price_from_yield, solve_yield

__all__ = [
    "BondParameters",
    "InvalidScheduleError",
    "generate_cashflows",
    "period_count",
    "YieldCache",
    "YieldCalculator",
    "SolverConfig",
    "ValidationLimits",
    "InvalidBondInputError",
    "validate_inputs",
    "validate_or_raise",
    "YieldResult",
    "present_value",
    "price_from_yield",
    "solve_yield",
]
