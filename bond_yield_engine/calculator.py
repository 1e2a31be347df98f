from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from .bonds import BondParameters
from .cache import YieldCache
from .config import DEFAULT_LIMITS, DEFAULT_SOLVER, SolverConfig, ValidationLimits
from .validation import validate_inputs, validate_or_raise
from .ytm import YieldResult, solve_yield

logger = logging.getLogger(__name__)


class YieldCalculator:
    def __init__(
        self,
        limits: Optional[ValidationLimits] = None,
        config: Optional[SolverConfig] = None,
        cache: Optional[YieldCache] = None,
    ):
        self.limits = limits or DEFAULT_LIMITS
        self.config = config or DEFAULT_SOLVER
        self.cache = cache if cache is not None else YieldCache()

    def validate(self, params: BondParameters) -> Dict[str, str]:
        return validate_inputs(params, self.limits)

    def _compute(self, params: BondParameters) -> YieldResult:
        return solve_yield(params, self.config)

    def solve(self, params: BondParameters) -> YieldResult:
        validate_or_raise(params, self.limits)
        return self.cache.get_or_compute(params, self._compute, tag=self.config)

    def try_solve(self, params: BondParameters) -> Tuple[Optional[YieldResult], Dict[str, str]]:
        """(result, {}) for valid inputs, (None, errors) otherwise."""
        errors = self.validate(params)
        if errors:
            logger.debug("Not solving %s: %s", params.key(), errors)
            return None, errors
        return self.cache.get_or_compute(params, self._compute, tag=self.config), {}
