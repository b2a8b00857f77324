"""Click CLI: look up rates, convert prices and explain VAT rules."""

from __future__ import annotations

import datetime as _dt
import logging
from decimal import Decimal, InvalidOperation

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from crossborder_vat import config
from crossborder_vat.calculator import (
    calculate_vat_from_net,
    calculate_vat_from_net_for_country,
    extract_net_from_gross,
    extract_net_from_gross_for_country,
)
from crossborder_vat.errors import Failure
from crossborder_vat.models.categories import ProductCategory, get_vat_rate, list_categories
from crossborder_vat.models.countries import CountryCode
from crossborder_vat.reporting.reports import fmt_rate, rates_report, rule_report
from crossborder_vat.rules import FulfillmentMethod, TransactionType, VATRuleParams

console = Console()

COUNTRY = click.Choice([c.value for c in CountryCode], case_sensitive=False)
DATE = click.DateTime(formats=["%Y-%m-%d"])


def _as_of(value: _dt.datetime | None) -> _dt.date:
    return value.date() if value else config.today()


def _number(value: str | None) -> Decimal | str | None:
    """Parse a CLI amount; unparseable text is passed through for the validator to reject."""
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        return value


def _abort(failure: Failure) -> None:
    err = failure.error
    field = f" ({err.field})" if err.field else ""
    console.print(f"[red]{err.code.value}{field}: {err.message}[/red]")
    raise SystemExit(1)


def _setup_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
def cli() -> None:
    """Cross-border VAT for EU, UK, Swiss and Norwegian e-commerce sales."""
    _setup_logging()


@cli.command()
@click.option("-d", "--date", "date_", type=DATE, help="Calculation date (YYYY-MM-DD)")
def rates(date_: _dt.datetime | None) -> None:
    """Show the rate table for all 30 countries."""
    rates_report(_as_of(date_))


@cli.command()
@click.argument("country", type=COUNTRY)
@click.option("-d", "--date", "date_", type=DATE, help="Calculation date (YYYY-MM-DD)")
@click.option("-c", "--category", type=click.Choice([c.value for c in ProductCategory]),
              default=ProductCategory.STANDARD.value, show_default=True)
def rate(country: str, date_: _dt.datetime | None, category: str) -> None:
    """Resolve the VAT rate for one country and product category."""
    resolved = get_vat_rate(country, category, _as_of(date_))
    console.print(f"{resolved.country.value}: [bold]{fmt_rate(resolved.rate)}[/bold] "
                  f"— {resolved.rule_applied}")


@cli.command()
def categories() -> None:
    """Show product categories and the rate column each one uses."""
    table = Table(title="Product Categories")
    table.add_column("Category", style="bold", width=18)
    table.add_column("Rate", width=14)
    table.add_column("Description", width=36)

    for entry in list_categories():
        table.add_row(entry.category.value, entry.rate_type.value, entry.description)

    console.print(table)


def _conversion_table(title: str, rows: list[tuple[str, str]]) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold", width=10)
    table.add_column("Amount", justify="right", width=12)
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)


@cli.command()
@click.argument("gross")
@click.option("--country", type=COUNTRY, help="Use this country's standard rate")
@click.option("--rate", "rate_", help="Explicit VAT rate as a decimal, e.g. 0.19")
@click.option("-d", "--date", "date_", type=DATE, help="Calculation date (YYYY-MM-DD)")
def net(gross: str, country: str | None, rate_: str | None, date_: _dt.datetime | None) -> None:
    """Extract net price and VAT from a VAT-inclusive GROSS price."""
    if (country is None) == (rate_ is None):
        raise click.UsageError("Give exactly one of --country or --rate.")

    if country:
        result = extract_net_from_gross_for_country(_number(gross), country, _as_of(date_))
    else:
        result = extract_net_from_gross(_number(gross), _number(rate_))
    if not result.success:
        _abort(result)

    data = result.data
    _conversion_table(f"Gross → Net @ {fmt_rate(data.vat_rate)}", [
        ("Net", str(data.net_price)),
        ("VAT", str(data.vat_amount)),
        ("Gross", str(data.net_price + data.vat_amount)),
    ])


@cli.command()
@click.argument("net_price", metavar="NET")
@click.option("--country", type=COUNTRY, help="Use this country's standard rate")
@click.option("--rate", "rate_", help="Explicit VAT rate as a decimal, e.g. 0.19")
@click.option("-d", "--date", "date_", type=DATE, help="Calculation date (YYYY-MM-DD)")
def gross(net_price: str, country: str | None, rate_: str | None,
          date_: _dt.datetime | None) -> None:
    """Add VAT to a NET price."""
    if (country is None) == (rate_ is None):
        raise click.UsageError("Give exactly one of --country or --rate.")

    if country:
        result = calculate_vat_from_net_for_country(_number(net_price), country, _as_of(date_))
    else:
        result = calculate_vat_from_net(_number(net_price), _number(rate_))
    if not result.success:
        _abort(result)

    data = result.data
    _conversion_table(f"Net → Gross @ {fmt_rate(data.vat_rate)}", [
        ("Net", str(data.gross_price - data.vat_amount)),
        ("VAT", str(data.vat_amount)),
        ("Gross", str(data.gross_price)),
    ])


@cli.command()
@click.option("--seller", required=True, type=COUNTRY, help="Seller's country")
@click.option("--buyer", required=True, type=COUNTRY, help="Buyer's country")
@click.option("--storage", type=COUNTRY, help="Country the FBA stock is stored in")
@click.option("--fulfillment", type=click.Choice([m.value for m in FulfillmentMethod]),
              default=FulfillmentMethod.FBM.value, show_default=True)
@click.option("--type", "transaction_type", type=click.Choice([t.value for t in TransactionType]),
              default=TransactionType.B2C.value, show_default=True)
@click.option("--sales", help="Annual cross-border sales in EUR")
@click.option("--price", help="Selling price, used with --volume when --sales is absent")
@click.option("--volume", help="Annual unit volume")
@click.option("-d", "--date", "date_", type=DATE, help="Calculation date (YYYY-MM-DD)")
def rule(seller: str, buyer: str, storage: str | None, fulfillment: str, transaction_type: str,
         sales: str | None, price: str | None, volume: str | None,
         date_: _dt.datetime | None) -> None:
    """Explain which country's VAT applies to a sale."""
    try:
        params = VATRuleParams(
            seller_country=seller.upper(),
            buyer_country=buyer.upper(),
            storage_country=storage.upper() if storage else None,
            fulfillment_method=fulfillment,
            transaction_type=transaction_type,
            annual_cross_border_sales=_number(sales),
            selling_price=_number(price),
            annual_volume=_number(volume),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    rule_report(params, _as_of(date_))
