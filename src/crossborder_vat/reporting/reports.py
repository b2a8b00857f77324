"""Rate tables and rule explanations rendered with rich."""

from __future__ import annotations

import datetime as _dt
from decimal import Decimal

from rich.console import Console
from rich.table import Table

from crossborder_vat.models.countries import is_eu_member
from crossborder_vat.models.rates import RATE_CHANGES, VAT_RATES, get_standard_rate
from crossborder_vat.rules import (
    VATRuleParams,
    check_oss_eligibility,
    check_vat_registration_required,
    get_applicable_rate,
    resolve_vat_rule,
)

console = Console()


def fmt_rate(rate: Decimal | None) -> str:
    """0.255 -> '25.5%', None -> '—'."""
    if rate is None:
        return "—"
    return f"{(rate * 100).normalize():f}%"


def rates_report(as_of: _dt.date) -> None:
    """Print standard and reduced rates for every supported country."""
    table = Table(title=f"VAT Rates — {as_of.isoformat()}")
    table.add_column("Code", style="bold")
    table.add_column("Country")
    table.add_column("EU")
    table.add_column("Standard", justify="right")
    table.add_column("Reduced 1", justify="right")
    table.add_column("Reduced 2", justify="right")
    table.add_column("Super", justify="right")

    notes = []

    for code in sorted(VAT_RATES, key=lambda c: c.value):
        rates = VAT_RATES[code]
        standard = get_standard_rate(code, as_of)
        # Highlight rates that differ from the static table because of a schedule
        style = "yellow" if code in RATE_CHANGES and standard != rates.standard_rate else ""
        table.add_row(
            code.value,
            rates.display_name,
            "✓" if is_eu_member(code) else "",
            f"[{style}]{fmt_rate(standard)}[/{style}]" if style else fmt_rate(standard),
            fmt_rate(rates.reduced_rate_1),
            fmt_rate(rates.reduced_rate_2),
            fmt_rate(rates.super_reduced_rate),
        )
        if rates.notes:
            notes.append(f"  {code.value}: {rates.notes}")

    console.print(table)
    for line in notes:
        console.print(line, style="dim")


def rule_report(params: VATRuleParams, as_of: _dt.date) -> None:
    """Explain which jurisdiction governs a sale and what follows from it."""
    result = resolve_vat_rule(params)
    registration = check_vat_registration_required(params)
    oss = check_oss_eligibility(params)

    table = Table(title="VAT Rule", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    route = f"{params.seller_country.value} → {params.buyer_country.value}"
    if params.storage_country is not None:
        route += f" (stored in {params.storage_country.value})"
    table.add_row("Route", route)
    table.add_row("Transaction", f"{params.transaction_type.value} / {params.fulfillment_method.value}")
    table.add_row("Annual sales", f"€{result.annual_sales:,.2f}")
    table.add_section()
    table.add_row("Rule", result.rule_description)
    table.add_row("VAT country", result.vat_country.value)
    table.add_row("Applicable rate", fmt_rate(get_applicable_rate(params, as_of)))
    table.add_row("Registration", registration.reason)
    table.add_row("OSS", oss.reason)

    console.print(table)
