"""
Command-line interface for the options pricing library.

This CLI provides access to:
- Option pricing (Black-Scholes)
- Greeks calculation
- Implied volatility solving
- Binomial lattice valuation
"""

import logging

import click

from finance_equations.core.black_scholes import black_scholes_price, calculate_greeks
from finance_equations.core.binomial import binomial_price
from finance_equations.solvers.implied_vol import implied_volatility
from finance_equations.utils.errors import PricingError


def _fail(exc: Exception) -> None:
    click.echo(f"\nError: {exc}", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Finance Equations - Black-Scholes, implied volatility and binomial lattices."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
@click.option("--type", "-t", "option_type", type=click.Choice(["call", "put"]), default="call")
def price(spot, strike, time, rate, vol, option_type):
    """Calculate option price using Black-Scholes."""
    try:
        price_value = black_scholes_price(spot, strike, time, rate, vol, option_type)
    except PricingError as exc:
        _fail(exc)
    click.echo(f"\n{option_type.capitalize()} Option Price: ${price_value:.4f}")


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility")
@click.option("--type", "-t", "option_type", type=click.Choice(["call", "put"]), default="call")
def greeks(spot, strike, time, rate, vol, option_type):
    """Calculate option Greeks."""
    try:
        greeks_values = calculate_greeks(spot, strike, time, rate, vol, option_type)
    except PricingError as exc:
        _fail(exc)

    click.echo(f"\nGreeks for {option_type.capitalize()} Option:")
    click.echo(f"  Delta:  {greeks_values.delta:>10.6f}")
    click.echo(f"  Gamma:  {greeks_values.gamma:>10.6f}")
    click.echo(f"  Vega:   {greeks_values.vega:>10.6f}")
    if greeks_values.theta is not None:
        click.echo(f"  Theta:  {greeks_values.theta:>10.6f} (per year)")


@cli.command()
@click.option("--market-price", "-p", type=float, required=True, help="Market price of the call")
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--guess", "-g", type=float, default=None, help="Initial volatility guess")
@click.option("--method", "-m", type=click.Choice(["newton", "brent", "auto"]), default="newton")
def iv(market_price, spot, strike, time, rate, guess, method):
    """Solve for call implied volatility."""
    try:
        result = implied_volatility(market_price, spot, strike, time, rate, guess, method=method)
    except PricingError as exc:
        _fail(exc)

    if result.success:
        click.echo(f"\nImplied Volatility: {result.volatility:.4f} ({result.volatility*100:.2f}%)")
        click.echo(f"Method: {result.method}")
        click.echo(f"Iterations: {result.iterations}")
    else:
        click.echo(f"\nSolver failed: {result.message}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Present value of the underlying")
@click.option("--strike", "-K", type=float, required=True, help="Strike / investment cost")
@click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility")
@click.option("--steps", "-n", type=int, default=100, show_default=True, help="Lattice steps")
@click.option("--european", is_flag=True, help="Disable early exercise")
def binomial(spot, strike, time, rate, vol, steps, european):
    """Price a call on a binomial lattice (American exercise by default)."""
    exercise = "european" if european else "american"
    try:
        value = binomial_price(spot, strike, time, rate, vol, steps, exercise)
    except PricingError as exc:
        _fail(exc)
    click.echo(f"\n{exercise.capitalize()} Call ({steps} steps): ${value:.4f}")


if __name__ == "__main__":
    cli()
