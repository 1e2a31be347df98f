from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

PERIODS_PER_YEAR = 2
_PERIOD_TOL = 1e-9


class InvalidScheduleError(ValueError):
    """Term does not map to a whole, positive number of semiannual periods."""


@dataclass(frozen=True)
class BondParameters:
    price: float
    coupon_rate_pct: float  # annual, percent of face, e.g. 11.5 = 11.5%
    years: float
    face: float = 100.0

    @property
    def periods(self) -> int:
        return period_count(self.years)

    @property
    def coupon_per_period(self) -> float:
        return (self.coupon_rate_pct / 100.0) * self.face / PERIODS_PER_YEAR

    def key(self) -> Tuple[float, float, float, float]:
        return (float(self.price), float(self.coupon_rate_pct), float(self.years), float(self.face))


def period_count(years: float) -> int:
    """
    Number of semiannual periods in `years`.

    Raises InvalidScheduleError unless years * 2 is a positive integer.
    """
    raw = float(years) * PERIODS_PER_YEAR
    if not math.isfinite(raw):
        raise InvalidScheduleError(f"Non-finite term: {years=}")

    n = int(round(raw))
    if abs(raw - n) > _PERIOD_TOL:
        raise InvalidScheduleError(f"Term must be a multiple of 0.5 years: {years=}")
    if n <= 0:
        raise InvalidScheduleError(f"Term must be positive: {years=}")
    return n


def generate_cashflows(params: BondParameters) -> np.ndarray:
    """
    Semiannual cash flows for periods 1..n (purchase outflow excluded).

    Every entry is the half-year coupon; the last one also repays face.
    The returned array is read-only.
    """
    n = period_count(params.years)

    cfs = np.full(n, params.coupon_per_period, dtype=float)
    cfs[-1] += params.face
    cfs.setflags(write=False)
    return cfs
