from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import brentq

from .bonds import BondParameters, generate_cashflows
from .config import DEFAULT_SOLVER, SolverConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YieldResult:
    period_rate: float
    bond_equivalent_yield: float
    effective_annual_rate: float
    periods: int
    cashflows: Tuple[float, ...]
    clamped: bool = False

    def present_value(self, period_rate: float) -> float:
        """PV of this schedule at an arbitrary per-period rate."""
        return present_value(self.cashflows, period_rate)

    def as_dict(self) -> Dict[str, object]:
        out = asdict(self)
        out["cashflows"] = list(self.cashflows)
        return out


def present_value(cashflows: Sequence[float], period_rate: float) -> float:
    """
    PV(y) = sum_t cf[t] / (1 + y)^t, t = 1..n.
    """
    cfs = np.asarray(cashflows, dtype=float)
    t = np.arange(1, len(cfs) + 1, dtype=float)
    dfs = (1.0 + period_rate) ** -t
    return float(np.dot(cfs, dfs))


def bisect_period_rate(
    cashflows: Sequence[float],
    price: float,
    lo: float = 0.0,
    hi: float = 1.0,
    iterations: int = 200,
) -> float:
    """
    Fixed-count bisection on the per-period rate.

    PV is strictly decreasing in y for non-negative cash flows, so PV(mid) > price
    puts the root above mid. A root outside [lo, hi] converges to the nearer bound.
    """
    cfs = np.asarray(cashflows, dtype=float)
    for _ in range(iterations):
        mid = (lo + hi) / 2
        if present_value(cfs, mid) > price:
            lo = mid
        else:
            hi = mid
    return (lo + hi) / 2


def brentq_period_rate(
    cashflows: Sequence[float],
    price: float,
    lo: float = 0.0,
    hi: float = 1.0,
    xtol: float = 1e-15,
) -> float:
    """Brent root of PV(y) - price on [lo, hi]; unbracketed roots clamp to a bound."""
    cfs = np.asarray(cashflows, dtype=float)

    def f(y: float) -> float:
        return present_value(cfs, y) - price

    f_lo, f_hi = f(lo), f(hi)
    if f_lo == 0.0:
        return lo
    if f_hi == 0.0:
        return hi
    if f_lo < 0.0:
        return lo
    if f_hi > 0.0:
        return hi

    return float(brentq(f, lo, hi, xtol=xtol))


def _is_clamped(cashflows: Sequence[float], price: float, config: SolverConfig) -> bool:
    """Root lies outside [lo, hi]; a root sitting exactly on a bound is not clamped."""
    return present_value(cashflows, config.lo) < price or present_value(cashflows, config.hi) > price


def solve_yield(params: BondParameters, config: Optional[SolverConfig] = None) -> YieldResult:
    """
    Per-period YTM for a whole number of semiannual periods.

    Returns period rate, BEY = 2y (market doubling convention) and
    EAR = (1+y)^2 - 1.
    """
    config = config or DEFAULT_SOLVER
    cfs = generate_cashflows(params)

    if config.method == "brentq":
        y = brentq_period_rate(cfs, params.price, config.lo, config.hi, config.xtol)
    else:
        y = bisect_period_rate(cfs, params.price, config.lo, config.hi, config.iterations)

    clamped = _is_clamped(cfs, params.price, config)
    if clamped:
        logger.warning(
            "Yield for %s converged to search bound [%s, %s]: %.12g",
            params.key(), config.lo, config.hi, y,
        )

    result = YieldResult(
        period_rate=y,
        bond_equivalent_yield=2 * y,
        effective_annual_rate=(1 + y) ** 2 - 1,
        periods=len(cfs),
        cashflows=tuple(float(c) for c in cfs),
        clamped=clamped,
    )
    logger.debug("Solved %s via %s: bey=%.10f", params.key(), config.method, result.bond_equivalent_yield)
    return result


def price_from_yield(
    bond_equivalent_yield: float,
    coupon_rate_pct: float,
    years: float,
    face: float = 100.0,
) -> float:
    """Price implied by a BEY (inverse of solve_yield)."""
    params = BondParameters(price=0.0, coupon_rate_pct=coupon_rate_pct, years=years, face=face)
    return present_value(generate_cashflows(params), bond_equivalent_yield / 2)
