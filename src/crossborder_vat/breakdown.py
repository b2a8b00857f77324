"""Output vs. input VAT and net profit for one sale line (all amounts VAT-inclusive)."""

from __future__ import annotations

import datetime as _dt
from decimal import Decimal

from crossborder_vat.calculator import Number, extract_net_from_gross, round_money
from crossborder_vat.errors import Failure, Result, Success, VATError
from crossborder_vat.models.categories import ProductCategory, get_vat_rate
from crossborder_vat.models.countries import CountryCode
from crossborder_vat.models.results import VATBreakdown


def calculate_vat_breakdown(sale_price: Number, cogs: Number, fees: Number,
                            country: CountryCode | str,
                            category: ProductCategory | str = ProductCategory.STANDARD,
                            as_of: _dt.date | None = None) -> Result[VATBreakdown]:
    """Net VAT liability = VAT collected on the sale - VAT reclaimable on COGS and fees.

    Every line uses the rate of ``category`` in ``country``. Field names in a
    Failure are prefixed with the offending line (``cogs.price``). Net profit
    is net revenue less net costs and the net VAT liability; the margin is 0
    when there is no net revenue.
    """
    try:
        vat_info = get_vat_rate(country, category, as_of)
    except VATError as exc:
        return Failure(exc.to_validation_error())

    lines = {}
    for name, amount in (("salePrice", sale_price), ("cogs", cogs), ("fees", fees)):
        res = extract_net_from_gross(amount, vat_info.rate)
        if not res.success:
            error = res.error.model_copy(update={"field": f"{name}.{res.error.field}"})
            return Failure(error)
        lines[name] = res.data

    sale, cost, fee = lines["salePrice"], lines["cogs"], lines["fees"]
    liability = sale.vat_amount - cost.vat_amount - fee.vat_amount
    net_profit = sale.net_price - cost.net_price - fee.net_price - liability
    if sale.net_price:
        margin = round_money(net_profit / sale.net_price * 100)
    else:
        margin = Decimal("0.00")

    return Success(VATBreakdown(
        country=vat_info.country,
        vat_rate=sale.vat_rate,
        revenue_gross=sale.net_price + sale.vat_amount,
        revenue_net=sale.net_price,
        cogs_gross=cost.net_price + cost.vat_amount,
        cogs_net=cost.net_price,
        fees_gross=fee.net_price + fee.vat_amount,
        fees_net=fee.net_price,
        output_vat=sale.vat_amount,
        input_vat_cogs=cost.vat_amount,
        input_vat_fees=fee.vat_amount,
        net_vat_liability=liability,
        net_profit=net_profit,
        margin_percentage=margin,
        vat_info=vat_info,
    ))
