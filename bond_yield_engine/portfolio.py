from __future__ import annotations

import numpy as np
import pandas as pd
from typing import List, Optional

from .bonds import BondParameters, generate_cashflows
from .config import SolverConfig, ValidationLimits
from .validation import validate_inputs
from .ytm import solve_yield

_FLAG_BY_FIELD = {
    "price": "BAD_PRICE",
    "coupon_rate_pct": "BAD_COUPON",
    "years": "BAD_YEARS",
    "face": "BAD_FACE",
}


def _params_from_row(r: pd.Series) -> BondParameters:
    face = r.get("face", 100.0)
    if pd.isna(face):
        face = 100.0
    return BondParameters(
        price=float(r["price"]),
        coupon_rate_pct=float(r["coupon_rate_pct"]),
        years=float(r["years"]),
        face=float(face),
    )


def qc_flags_for_bond(params: BondParameters, limits: Optional[ValidationLimits] = None) -> List[str]:
    return [_FLAG_BY_FIELD[field] for field in validate_inputs(params, limits)]


def build_cashflow_table(portfolio: pd.DataFrame, limits: Optional[ValidationLimits] = None) -> pd.DataFrame:
    """Long table of semiannual cash flows; rows failing QC are skipped."""
    rows = []
    for _, r in portfolio.iterrows():
        params = _params_from_row(r)
        if qc_flags_for_bond(params, limits):
            continue

        for i, cf in enumerate(generate_cashflows(params), start=1):
            rows.append((str(r["bond_id"]), i, i / 2.0, float(cf)))

    return pd.DataFrame(rows, columns=["bond_id", "period", "year", "cashflow"])


def solve_portfolio_yields(
    portfolio: pd.DataFrame,
    limits: Optional[ValidationLimits] = None,
    config: Optional[SolverConfig] = None,
) -> pd.DataFrame:
    """
    Per-bond period rate, BEY and EAR. Rows failing QC keep NaN metrics and
    carry their flags.
    """
    missing = {"bond_id", "price", "coupon_rate_pct", "years"} - set(portfolio.columns)
    if missing:
        raise ValueError(f"Portfolio is missing columns: {sorted(missing)}")

    out = portfolio.copy()
    if "face" not in out.columns:
        out["face"] = 100.0

    periods, y_list, bey_list, ear_list, flag_list = [], [], [], [], []
    for _, r in out.iterrows():
        params = _params_from_row(r)
        flags = qc_flags_for_bond(params, limits)

        if flags:
            periods.append(np.nan)
            y_list.append(np.nan)
            bey_list.append(np.nan)
            ear_list.append(np.nan)
        else:
            res = solve_yield(params, config)
            periods.append(res.periods)
            y_list.append(res.period_rate)
            bey_list.append(res.bond_equivalent_yield)
            ear_list.append(res.effective_annual_rate)

        flag_list.append("|".join(flags) if flags else "")

    out["periods"] = pd.array(periods, dtype="Int64")
    out["period_rate"] = y_list
    out["bey"] = bey_list
    out["ear"] = ear_list
    out["flags"] = flag_list
    return out
