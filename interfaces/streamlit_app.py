"""
Streamlit web interface for the options calculators.

Interactive UI with tabs for:
- Greeks calculator and sensitivity charts
- Implied volatility solver
- Max pain over an editable open-interest table
- Margin scenario with performance comparison chart
- Breakeven, ROI, Sharpe and Sortino calculators
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from tradetools.calculators import (
    compute_breakeven,
    compute_greeks,
    compute_margin_scenario,
    compute_max_pain,
    compute_roi_metrics,
    compute_sharpe_ratio,
    compute_sortino_ratio,
    margin_projection,
    option_price,
    pain_profile,
    sortino_rating,
)
from tradetools.solvers.implied_vol import implied_volatility
from tradetools.utils.types import (
    ImpliedVolatilityQuery,
    MarginScenario,
    OpenInterestRow,
    OptionParameters,
)

st.set_page_config(page_title="Trade Tools", layout="wide")

st.title("Trade Tools")
st.markdown("Options and trading calculators")

# Sidebar parameters
st.sidebar.header("Option Parameters")
S = st.sidebar.number_input("Underlying Price", value=100.0, min_value=0.01)
K = st.sidebar.number_input("Strike Price", value=100.0, min_value=0.01)
days = st.sidebar.number_input("Days to Expiration", value=30.0, min_value=1.0)
r = st.sidebar.slider("Risk-Free Rate (%)", 0.0, 20.0, 5.0) / 100
sigma = st.sidebar.slider("Volatility (%)", 1.0, 200.0, 25.0) / 100
option_type = st.sidebar.selectbox("Option Type", ["call", "put"])

params = OptionParameters(S, K, days, sigma, r, option_type)

tabs = st.tabs(["Greeks", "Implied Volatility", "Max Pain", "Margin", "Breakeven & ROI", "Ratios"])

with tabs[0]:
    st.header("Option Greeks")

    greeks_vals = compute_greeks(params)
    price = option_price(params)

    if greeks_vals is None or price is None:
        st.warning("Greeks are not available for these inputs.")
    else:
        st.metric(label=f"{option_type.capitalize()} Price", value=f"${price:.4f}")
        greeks_df = pd.DataFrame({
            "Greek": ["Delta (%)", "Gamma", "Theta", "Vega"],
            "Value": [
                f"{greeks_vals.delta:.2f}",
                f"{greeks_vals.gamma:.6f}",
                f"{greeks_vals.theta:.6f}",
                f"{greeks_vals.vega:.6f}",
            ],
            "Description": [
                "Price change per $1 move, in percent",
                "Delta change per $1 move",
                "Price change per calendar day",
                "Price change per 1 point vol move",
            ],
        })
        st.table(greeks_df)

        # Delta and Gamma vs Spot
        spot_range = np.linspace(S * 0.7, S * 1.3, 50)
        sweep = [
            compute_greeks(OptionParameters(float(s), K, days, sigma, r, option_type))
            for s in spot_range
        ]

        fig_delta = go.Figure()
        fig_delta.add_trace(go.Scatter(x=spot_range, y=[g.delta for g in sweep], name="Delta"))
        fig_delta.update_layout(title="Delta vs Underlying Price", xaxis_title="Underlying Price", yaxis_title="Delta (%)")
        st.plotly_chart(fig_delta, use_container_width=True)

        fig_gamma = go.Figure()
        fig_gamma.add_trace(go.Scatter(x=spot_range, y=[g.gamma for g in sweep], name="Gamma", line=dict(color="orange")))
        fig_gamma.update_layout(title="Gamma vs Underlying Price", xaxis_title="Underlying Price", yaxis_title="Gamma")
        st.plotly_chart(fig_gamma, use_container_width=True)

with tabs[1]:
    st.header("Implied Volatility Solver")

    market_price = st.number_input("Market Price", value=float(price or 1.0), min_value=0.01)
    method = st.radio("Solver", ["newton", "auto"], horizontal=True)

    if st.button("Solve for Implied Volatility"):
        query = ImpliedVolatilityQuery(S, K, days, r, market_price, option_type)
        result = implied_volatility(query, method=method)

        if result.success:
            st.success(f"Implied Volatility: {result.volatility:.4f} ({result.volatility*100:.2f}%)")
            st.info(f"Method: {result.method} | Iterations: {result.iterations}")
        else:
            st.error(f"Solver failed: {result.message}")

with tabs[2]:
    st.header("Max Pain")

    chain = st.data_editor(
        pd.DataFrame({
            "strike": [100.0, 105.0, 110.0, 115.0, 120.0],
            "call_oi": [5000.0, 6500.0, 8000.0, 3500.0, 2000.0],
            "put_oi": [7000.0, 5500.0, 3000.0, 4500.0, 9000.0],
        }),
        num_rows="dynamic",
    )
    convention = st.radio("Selection", ["reference", "minimum_payout"], horizontal=True)

    table = [
        OpenInterestRow(float(row.strike), float(row.call_oi), float(row.put_oi))
        for row in chain.dropna().itertuples()
    ]
    strike = compute_max_pain(table, convention)

    if strike is None:
        st.warning("Enter at least one strike with non-negative open interest.")
    else:
        st.metric("Max Pain Strike", f"${strike:.2f}")
        profile = pd.DataFrame(pain_profile(table), columns=["strike", "payout"])
        fig_pain = go.Figure(go.Bar(x=profile["strike"], y=profile["payout"]))
        fig_pain.update_layout(title="Aggregate Payout to Holders", xaxis_title="Settlement Strike", yaxis_title="Payout")
        st.plotly_chart(fig_pain, use_container_width=True)

with tabs[3]:
    st.header("Margin Calculator")

    col1, col2 = st.columns(2)
    with col1:
        capital = st.number_input("Initial Capital", value=10000.0, min_value=0.0)
        loan = st.number_input("Margin Loan", value=10000.0, min_value=0.0)
        loan_rate = st.number_input("Interest Rate (%)", value=8.0, min_value=0.0)
    with col2:
        duration = st.number_input("Duration (days)", value=365.0, min_value=0.0)
        change = st.slider("Price Change (%)", -50.0, 50.0, 10.0)

    scenario = MarginScenario(capital, loan, loan_rate, duration, change)
    margin_result = compute_margin_scenario(scenario)

    if margin_result is None:
        st.warning("Margin results are not available for these inputs.")
    else:
        m1, m2, m3 = st.columns(3)
        m1.metric("Net Profit with Margin", f"${margin_result.net_profit_with_margin:,.2f}", f"{margin_result.roi_with_margin:.2f}%")
        m2.metric("Profit without Margin", f"${margin_result.profit_without_margin:,.2f}", f"{margin_result.roi_without_margin:.2f}%")
        m3.metric("Margin Call Value", f"${margin_result.margin_call_value:,.2f}", f"-{margin_result.margin_call_percentage_drop:.2f}%")

        projection = pd.DataFrame(margin_projection(scenario))
        fig_margin = go.Figure()
        fig_margin.add_trace(go.Scatter(x=projection["price_change_pct"], y=projection["cash_only_value"], name="Cash Only"))
        fig_margin.add_trace(go.Scatter(x=projection["price_change_pct"], y=projection["with_margin_value"], name="With Margin"))
        fig_margin.update_layout(title="Performance Comparison", xaxis_title="Price Change (%)", yaxis_title="Equity")
        st.plotly_chart(fig_margin, use_container_width=True)

with tabs[4]:
    st.header("Breakeven & ROI")

    col1, col2 = st.columns(2)
    with col1:
        premium = st.number_input("Premium", value=5.50)
        value = compute_breakeven(K, premium, option_type)
        if value is not None:
            st.metric("Breakeven Price", f"${value:.2f}")
    with col2:
        initial = st.number_input("Initial Investment", value=1000.0)
        collected = st.number_input("Premium Collected", value=250.0)
        held = st.number_input("Duration (days) ", value=30.0)
        metrics = compute_roi_metrics(initial, collected, held)
        if metrics is None:
            st.warning("Initial investment and duration must be non-zero.")
        else:
            st.metric("ROI", f"{metrics.roi:.2f}%")
            st.metric("Annualized ROI", f"{metrics.annualized_roi:.2f}%")
            st.metric("Premium per Day", f"${metrics.premium_per_day:.2f}")

with tabs[5]:
    st.header("Risk-Adjusted Return")

    rp = st.number_input("Investment Return (%)", value=12.0)
    rf = st.number_input("Risk-Free Rate (%)", value=4.0)
    col1, col2 = st.columns(2)
    with col1:
        sigma_p = st.number_input("Standard Deviation (%)", value=15.0)
        sharpe_ratio = compute_sharpe_ratio(rp, rf, sigma_p)
        st.metric("Sharpe Ratio", "n/a" if sharpe_ratio is None else f"{sharpe_ratio:.2f}")
    with col2:
        sigma_d = st.number_input("Downside Deviation (%)", value=8.0)
        sortino_ratio = compute_sortino_ratio(rp, rf, sigma_d)
        st.metric(
            "Sortino Ratio",
            "n/a" if sortino_ratio is None else f"{sortino_ratio:.2f}",
            sortino_rating(sortino_ratio),
        )
