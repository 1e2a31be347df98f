from __future__ import annotations

from dataclasses import dataclass

SOLVER_METHODS = ("bisection", "brentq")


@dataclass(frozen=True)
class ValidationLimits:
    """
    Accepted input ranges. Prices are per 100 face, coupon in percent. The term
    step is fixed at half a year by bonds.period_count.
    """
    price_min: float = 50.0
    price_max: float = 150.0
    coupon_min: float = 0.0
    coupon_max: float = 20.0
    years_max: float = 10.0

    def __post_init__(self) -> None:
        if self.price_min > self.price_max:
            raise ValueError(f"price_min > price_max: {self.price_min} > {self.price_max}")
        if self.coupon_min > self.coupon_max:
            raise ValueError(f"coupon_min > coupon_max: {self.coupon_min} > {self.coupon_max}")
        if self.years_max <= 0:
            raise ValueError("years_max must be positive")


@dataclass(frozen=True)
class SolverConfig:
    """
    Per-period rate search settings.

    - bisection: fixed `iterations` halvings of [lo, hi], no early exit.
    - brentq: scipy root finder stopped at `xtol`.
    """
    lo: float = 0.0
    hi: float = 1.0
    iterations: int = 200
    method: str = "bisection"
    xtol: float = 1e-15

    def __post_init__(self) -> None:
        if self.lo <= -1.0:
            raise ValueError("lo must be > -1 (discount factor undefined at -100%)")
        if self.lo >= self.hi:
            raise ValueError(f"lo must be < hi: {self.lo=} {self.hi=}")
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")
        if self.method not in SOLVER_METHODS:
            raise ValueError(f"Unsupported solver method: {self.method}")
        if self.xtol <= 0:
            raise ValueError("xtol must be positive")


DEFAULT_LIMITS = ValidationLimits()
DEFAULT_SOLVER = SolverConfig()
