from __future__ import annotations

import pandas as pd
from typing import Dict

from .bonds import BondParameters
from .ytm import YieldResult


def build_chart_frame(params: BondParameters, result: YieldResult) -> pd.DataFrame:
    """
    Chart series for periods 0..n.

    Period 0 carries the purchase price as a negative `other_flow`; the last
    period splits into coupon and principal. `ytm_line` is BEY in percent.
    """
    coupon = params.coupon_per_period
    n = result.periods
    ytm_pct = result.bond_equivalent_yield * 100.0

    rows = []
    for i in range(n + 1):
        coupon_flow = 0.0
        other_flow = 0.0

        if i == 0:
            other_flow = -float(params.price)
        elif i == n:
            coupon_flow = coupon
            other_flow = float(params.face)
        else:
            coupon_flow = coupon

        rows.append(
            {
                "year_label": f"{i * 0.5:.1f}",
                "period": i,
                "coupon_flow": coupon_flow,
                "other_flow": other_flow,
                "total_flow": coupon_flow + other_flow,
                "ytm_line": ytm_pct,
            }
        )

    return pd.DataFrame(rows)


def format_percent(x: float, decimals: int = 2) -> str:
    return f"{x * 100:.{decimals}f}%"


def format_result(result: YieldResult, decimals: int = 2) -> Dict[str, str]:
    return {
        "period_rate": format_percent(result.period_rate, decimals),
        "bond_equivalent_yield": format_percent(result.bond_equivalent_yield, decimals),
        "effective_annual_rate": format_percent(result.effective_annual_rate, decimals),
    }
