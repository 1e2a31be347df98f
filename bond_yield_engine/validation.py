from __future__ import annotations

import math
from typing import Dict, Optional

from .bonds import BondParameters, InvalidScheduleError, period_count
from .config import DEFAULT_LIMITS, ValidationLimits


class InvalidBondInputError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


def _fmt(x: float) -> str:
    return f"{x:g}"


def validate_inputs(params: BondParameters, limits: Optional[ValidationLimits] = None) -> Dict[str, str]:
    """
    Field-level error messages, keyed by field name. Empty when the bundle may
    be passed to the solver.
    """
    limits = limits or DEFAULT_LIMITS
    errors: Dict[str, str] = {}

    price = float(params.price)
    if not (math.isfinite(price) and limits.price_min <= price <= limits.price_max):
        errors["price"] = f"Price must be between ${_fmt(limits.price_min)} and ${_fmt(limits.price_max)}"

    coupon = float(params.coupon_rate_pct)
    if not (math.isfinite(coupon) and limits.coupon_min <= coupon <= limits.coupon_max):
        errors["coupon_rate_pct"] = (
            f"Coupon must be between {_fmt(limits.coupon_min)}% and {_fmt(limits.coupon_max)}%"
        )

    years = float(params.years)
    if not (math.isfinite(years) and 0 < years <= limits.years_max):
        errors["years"] = f"Years to Maturity must be between 0 and {_fmt(limits.years_max)}"
    else:
        try:
            period_count(years)
        except InvalidScheduleError:
            errors["years"] = "Years to Maturity must be a multiple of 0.5"

    face = float(params.face)
    if not (math.isfinite(face) and face > 0):
        errors["face"] = "Face value must be positive"

    return errors


def validate_or_raise(params: BondParameters, limits: Optional[ValidationLimits] = None) -> None:
    errors = validate_inputs(params, limits)
    if errors:
        raise InvalidBondInputError(errors)
