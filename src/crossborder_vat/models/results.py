"""Pydantic result models returned by the calculation API.

Fields are snake_case in Python and serialize to camelCase for the UI
(``model_dump(by_alias=True)``); either spelling is accepted on input.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from crossborder_vat.models.countries import CountryCode
from crossborder_vat.models.rates import VATRateType

RESULT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class NetFromGrossResult(BaseModel):
    net_price: Decimal
    vat_amount: Decimal
    vat_rate: Decimal

    model_config = RESULT_CONFIG


class VATFromNetResult(BaseModel):
    vat_amount: Decimal
    gross_price: Decimal
    vat_rate: Decimal

    model_config = RESULT_CONFIG


class VATRate(BaseModel):
    """A resolved rate and the rule that produced it."""

    rate: Decimal
    rate_type: VATRateType
    country: CountryCode
    rule_applied: str

    model_config = RESULT_CONFIG


class VATBreakdown(BaseModel):
    """Output VAT on a sale against reclaimable input VAT on its costs.

    A negative ``net_vat_liability`` is a refund position.
    ``margin_percentage`` is net profit over net revenue, in percent.
    """

    country: CountryCode
    vat_rate: Decimal
    revenue_gross: Decimal
    revenue_net: Decimal
    cogs_gross: Decimal
    cogs_net: Decimal
    fees_gross: Decimal
    fees_net: Decimal
    output_vat: Decimal
    input_vat_cogs: Decimal
    input_vat_fees: Decimal
    net_vat_liability: Decimal
    net_profit: Decimal
    margin_percentage: Decimal
    vat_info: VATRate

    model_config = RESULT_CONFIG
