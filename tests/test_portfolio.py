import numpy as np
import pandas as pd
import pytest

from bond_yield_engine.bonds import BondParameters
from bond_yield_engine.portfolio import build_cashflow_table, solve_portfolio_yields
from bond_yield_engine.ytm import solve_yield


@pytest.fixture(scope="module")
def portfolio_df():
    return pd.DataFrame(
        {
            "bond_id": ["REF_5Y", "PAR_3Y", "ZERO_10Y", "BAD_PX", "BAD_TERM"],
            "price": [97.76, 100.0, 55.0, 200.0, 100.0],
            "coupon_rate_pct": [11.0088, 6.0, 0.0, 5.0, 5.0],
            "years": [5.0, 3.0, 10.0, 2.0, 2.2],
            "face": [100.0] * 5,
        }
    )


def test_portfolio_outputs(portfolio_df):
    out = solve_portfolio_yields(portfolio_df)
    assert {"bond_id", "periods", "period_rate", "bey", "ear", "flags"}.issubset(out.columns)
    assert len(out) == len(portfolio_df)


def test_valid_rows_match_single_solver(portfolio_df):
    out = solve_portfolio_yields(portfolio_df).set_index("bond_id")
    single = solve_yield(BondParameters(97.76, 11.0088, 5.0))
    assert out.loc["REF_5Y", "bey"] == single.bond_equivalent_yield
    assert out.loc["REF_5Y", "periods"] == 10
    assert abs(out.loc["PAR_3Y", "bey"] - 0.06) < 1e-12
    assert out.loc["ZERO_10Y", "flags"] == ""


def test_invalid_rows_flagged(portfolio_df):
    out = solve_portfolio_yields(portfolio_df).set_index("bond_id")
    assert out.loc["BAD_PX", "flags"] == "BAD_PRICE"
    assert out.loc["BAD_TERM", "flags"] == "BAD_YEARS"
    assert np.isnan(out.loc["BAD_PX", "bey"])
    assert pd.isna(out.loc["BAD_TERM", "periods"])


def test_face_defaults_to_100(portfolio_df):
    out = solve_portfolio_yields(portfolio_df.drop(columns=["face"]))
    assert (out["face"] == 100.0).all()
    assert abs(out.loc[1, "bey"] - 0.06) < 1e-12


def test_missing_columns_rejected():
    with pytest.raises(ValueError):
        solve_portfolio_yields(pd.DataFrame({"bond_id": ["X"], "price": [100.0]}))


def test_cashflow_table(portfolio_df):
    cf = build_cashflow_table(portfolio_df)
    assert set(cf["bond_id"]) == {"REF_5Y", "PAR_3Y", "ZERO_10Y"}
    assert (cf.groupby("bond_id").size() == pd.Series({"PAR_3Y": 6, "REF_5Y": 10, "ZERO_10Y": 20})).all()

    last = cf[cf["bond_id"] == "REF_5Y"].iloc[-1]
    assert last["period"] == 10 and last["year"] == 5.0
    assert abs(last["cashflow"] - 105.5044) < 1e-12


def test_tiny_term_row_does_not_abort_batch():
    df = pd.DataFrame(
        {
            "bond_id": ["OK_2Y", "TINY"],
            "price": [100.0, 100.0],
            "coupon_rate_pct": [5.0, 5.0],
            "years": [2.0, 1e-10],
        }
    )
    out = solve_portfolio_yields(df).set_index("bond_id")
    assert abs(out.loc["OK_2Y", "bey"] - 0.05) < 1e-12
    assert out.loc["TINY", "flags"] == "BAD_YEARS"
    assert np.isnan(out.loc["TINY", "bey"])
    assert set(build_cashflow_table(df)["bond_id"]) == {"OK_2Y"}
