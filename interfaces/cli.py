"""
Command-line interface for the options calculators.

This CLI provides access to:
- Option pricing and Greeks (Black-Scholes)
- Implied volatility solving
- Max pain over an open-interest table
- Breakeven, premium ROI, margin scenarios
- Sharpe and Sortino ratios
"""

import logging

import click

from tradetools.calculators import (
    compute_breakeven,
    compute_greeks,
    compute_implied_volatility,
    compute_margin_scenario,
    compute_max_pain,
    compute_roi_metrics,
    compute_sharpe_ratio,
    compute_sortino_ratio,
    option_price,
    pain_profile,
    sortino_rating,
)
from tradetools.utils.types import (
    ImpliedVolatilityQuery,
    MarginScenario,
    OpenInterestRow,
    OptionParameters,
)


def _unavailable(what: str) -> None:
    click.echo(f"\n{what}: not available (check inputs, run with --verbose for details)", err=True)
    raise SystemExit(1)


def option_options(with_vol: bool = True):
    """Shared contract/market options of the option commands."""

    def decorator(f):
        options = [
            click.option("--spot", "-S", type=float, required=True, help="Underlying price"),
            click.option("--strike", "-K", type=float, required=True, help="Strike price"),
            click.option("--days", "-d", type=float, required=True, help="Days to expiration"),
            click.option("--rate", "-r", type=float, default=0.0, help="Risk-free rate (decimal)"),
        ]
        if with_vol:
            options.append(
                click.option("--vol", "-v", type=float, required=True, help="Volatility (decimal)")
            )
        options.append(click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call"))
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", is_flag=True, help="Log calculation details to stderr")
def cli(verbose):
    """Trade Tools - options and trading calculators."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@option_options()
def price(spot, strike, days, rate, vol, type):
    """Calculate option price using Black-Scholes."""
    params = OptionParameters(spot, strike, days, vol, rate, type)
    price_value = option_price(params)
    if price_value is None:
        _unavailable("Price")
    click.echo(f"\n{type.capitalize()} Option Price: ${price_value:.4f}")


@cli.command()
@option_options()
def greeks(spot, strike, days, rate, vol, type):
    """Calculate option Greeks."""
    params = OptionParameters(spot, strike, days, vol, rate, type)
    greeks_values = compute_greeks(params)
    if greeks_values is None:
        _unavailable("Greeks")

    click.echo(f"\nGreeks for {type.capitalize()} Option:")
    click.echo(f"  Delta:  {greeks_values.delta:>10.4f} (%)")
    click.echo(f"  Gamma:  {greeks_values.gamma:>10.6f}")
    click.echo(f"  Theta:  {greeks_values.theta:>10.6f} (per day)")
    click.echo(f"  Vega:   {greeks_values.vega:>10.6f} (per vol point)")


@cli.command()
@click.option("--market-price", "-p", type=float, required=True, help="Observed option price")
@option_options(with_vol=False)
@click.option(
    "--method",
    type=click.Choice(["newton", "auto", "brent"]),
    default="newton",
    help="newton: reference solver; auto: bounds check and Brent fallback",
)
def iv(market_price, spot, strike, days, rate, type, method):
    """Solve for implied volatility."""
    query = ImpliedVolatilityQuery(spot, strike, days, rate, market_price, type)
    volatility = compute_implied_volatility(query, method=method)
    if volatility is None:
        _unavailable("Implied Volatility")
    click.echo(f"\nImplied Volatility: {volatility:.4f} ({volatility*100:.2f}%)")


@cli.command("max-pain")
@click.option(
    "--row",
    "rows",
    type=(float, float, float),
    multiple=True,
    required=True,
    help="STRIKE CALL_OI PUT_OI, repeat per strike",
)
@click.option(
    "--convention",
    type=click.Choice(["reference", "minimum_payout"]),
    default="reference",
    help="reference: largest aggregate payout; minimum_payout: textbook max pain",
)
def max_pain(rows, convention):
    """Find the max-pain strike of an open-interest table."""
    table = [OpenInterestRow(strike, calls, puts) for strike, calls, puts in rows]
    strike = compute_max_pain(table, convention)
    if strike is None:
        _unavailable("Max Pain")

    click.echo("\n  Strike        Payout")
    for row_strike, pain in pain_profile(table):
        marker = " <" if row_strike == strike else ""
        click.echo(f"  {row_strike:>8.2f}  {pain:>12,.0f}{marker}")
    click.echo(f"\nMax Pain Strike: ${strike:.2f}")


@cli.command()
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--premium", "-p", type=float, required=True, help="Premium paid")
@click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call")
def breakeven(strike, premium, type):
    """Calculate the breakeven price at expiration."""
    value = compute_breakeven(strike, premium, type)
    if value is None:
        _unavailable("Breakeven")
    click.echo(f"\nBreakeven Price: ${value:.2f}")


@cli.command()
@click.option("--initial", type=float, required=True, help="Capital committed")
@click.option("--premium", type=float, required=True, help="Premium collected")
@click.option("--days", type=float, required=True, help="Trade duration in days")
def roi(initial, premium, days):
    """Calculate premium ROI metrics."""
    metrics = compute_roi_metrics(initial, premium, days)
    if metrics is None:
        _unavailable("ROI")
    click.echo(f"\nROI:            {metrics.roi:.2f}%")
    click.echo(f"Annualized ROI: {metrics.annualized_roi:.2f}%")
    click.echo(f"Premium/Day:    ${metrics.premium_per_day:.2f}")


@cli.command()
@click.option("--capital", type=float, required=True, help="Initial capital")
@click.option("--loan", type=float, default=0.0, help="Margin loan")
@click.option("--rate", type=float, default=0.0, help="Loan interest rate (%)")
@click.option("--days", type=float, default=365.0, help="Holding period in days")
@click.option("--change", type=float, required=True, help="Price change (%)")
def margin(capital, loan, rate, days, change):
    """Compare a trade with and without margin."""
    result = compute_margin_scenario(MarginScenario(capital, loan, rate, days, change))
    if result is None:
        _unavailable("Margin")
    click.echo(f"\nBuying Power:           ${result.total_buying_power:,.2f}")
    click.echo(f"Interest Cost:          ${result.interest_cost:,.2f}")
    click.echo(f"Profit without Margin:  ${result.profit_without_margin:,.2f} ({result.roi_without_margin:.2f}%)")
    click.echo(f"Net Profit with Margin: ${result.net_profit_with_margin:,.2f} ({result.roi_with_margin:.2f}%)")
    click.echo(f"Margin Call Value:      ${result.margin_call_value:,.2f} (-{result.margin_call_percentage_drop:.2f}%)")


@cli.command()
@click.option("--return", "portfolio_return", type=float, required=True, help="Portfolio return (%)")
@click.option("--risk-free", type=float, required=True, help="Risk-free rate (%)")
@click.option("--std-dev", type=float, required=True, help="Standard deviation (%)")
def sharpe(portfolio_return, risk_free, std_dev):
    """Calculate the Sharpe ratio."""
    ratio = compute_sharpe_ratio(portfolio_return, risk_free, std_dev)
    if ratio is None:
        _unavailable("Sharpe Ratio")
    click.echo(f"\nSharpe Ratio: {ratio:.2f}")


@cli.command()
@click.option("--return", "portfolio_return", type=float, required=True, help="Portfolio return (%)")
@click.option("--risk-free", type=float, required=True, help="Risk-free rate (%)")
@click.option("--downside-dev", type=float, required=True, help="Downside deviation (%)")
def sortino(portfolio_return, risk_free, downside_dev):
    """Calculate the Sortino ratio."""
    ratio = compute_sortino_ratio(portfolio_return, risk_free, downside_dev)
    if ratio is None:
        _unavailable("Sortino Ratio")
    click.echo(f"\nSortino Ratio: {ratio:.2f} ({sortino_rating(ratio)})")


if __name__ == "__main__":
    cli()
