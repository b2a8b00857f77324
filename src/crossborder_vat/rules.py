"""Which country's VAT governs a sale, and the registration/OSS consequences.

The decision is a strict priority chain; the first matching rule wins:

1. reverse charge   B2B and seller country != buyer country
2. local sale       FBA with stock stored in the buyer's country
3. domestic         seller country == buyer country
4. distance selling annual cross-border sales >= EUR 10,000
5. origin country   everything else
"""

from __future__ import annotations

import datetime as _dt
import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from crossborder_vat.models.countries import CountryCode, country_name
from crossborder_vat.models.rates import get_standard_rate

logger = logging.getLogger(__name__)

# Post-2021 EU-wide threshold for cross-border B2C distance sales (EUR)
DISTANCE_SELLING_THRESHOLD = Decimal("10000")
_THRESHOLD_LABEL = f"€{DISTANCE_SELLING_THRESHOLD:,.0f}"

_PARAMS_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class FulfillmentMethod(str, Enum):
    FBA = "FBA"  # fulfilled by Amazon from its warehouses
    FBM = "FBM"  # fulfilled by the merchant


class TransactionType(str, Enum):
    B2C = "B2C"
    B2B = "B2B"


class VATRuleKind(str, Enum):
    REVERSE_CHARGE = "reverse_charge"
    LOCAL_SALE = "local_sale"
    DOMESTIC = "domestic"
    DISTANCE_SELLING = "distance_selling"
    ORIGIN_COUNTRY = "origin_country"


def _non_negative(value: object) -> Decimal:
    """Missing, unparseable, NaN, infinite or negative figures count as zero."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        value = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")
    if not value.is_finite() or value < 0:
        return Decimal("0")
    return value


class VATRuleParams(BaseModel):
    seller_country: CountryCode
    buyer_country: CountryCode
    storage_country: Optional[CountryCode] = None
    fulfillment_method: FulfillmentMethod = FulfillmentMethod.FBM
    transaction_type: TransactionType = TransactionType.B2C
    annual_cross_border_sales: Optional[Decimal] = None
    selling_price: Optional[Decimal] = None
    annual_volume: Optional[Decimal] = None

    model_config = _PARAMS_CONFIG

    @field_validator("annual_cross_border_sales", "selling_price", "annual_volume",
                     mode="before")
    @classmethod
    def _coerce_figure(cls, value: object) -> Decimal | None:
        # Bad figures become 0 rather than failing validation
        if value is None:
            return None
        return _non_negative(value)


class VATRuleResult(BaseModel):
    rule: VATRuleKind
    vat_country: CountryCode
    rule_description: str
    is_domestic: bool = False
    is_distance_selling: bool = False
    is_reverse_charge: bool = False
    is_local_sale: bool = False
    annual_sales: Decimal = Decimal("0")

    model_config = _PARAMS_CONFIG


class RegistrationResult(BaseModel):
    required: bool
    countries: list[CountryCode] = Field(default_factory=list)
    reason: str

    model_config = _PARAMS_CONFIG


class OSSResult(BaseModel):
    eligible: bool
    reason: str

    model_config = _PARAMS_CONFIG


def annual_sales(params: VATRuleParams) -> Decimal:
    """Explicit annual cross-border sales, else selling price x annual volume."""
    if params.annual_cross_border_sales is not None:
        return _non_negative(params.annual_cross_border_sales)
    return _non_negative(_non_negative(params.selling_price) * _non_negative(params.annual_volume))


def resolve_vat_rule(params: VATRuleParams) -> VATRuleResult:
    seller, buyer = params.seller_country, params.buyer_country
    sales = annual_sales(params)

    if params.transaction_type is TransactionType.B2B and seller != buyer:
        result = VATRuleResult(
            rule=VATRuleKind.REVERSE_CHARGE,
            vat_country=seller,
            rule_description="Reverse charge (buyer accounts for VAT)",
            is_reverse_charge=True,
            annual_sales=sales,
        )
    elif (params.fulfillment_method is FulfillmentMethod.FBA
          and params.storage_country is not None
          and params.storage_country == buyer):
        result = VATRuleResult(
            rule=VATRuleKind.LOCAL_SALE,
            vat_country=buyer,
            rule_description=(f"Local sale in {country_name(buyer)} "
                              "(FBA inventory stored in destination country)"),
            is_local_sale=True,
            annual_sales=sales,
        )
    elif seller == buyer:
        result = VATRuleResult(
            rule=VATRuleKind.DOMESTIC,
            vat_country=seller,
            rule_description=(f"Domestic sale in {country_name(seller)} "
                              "(seller and buyer in same country)"),
            is_domestic=True,
            annual_sales=sales,
        )
    elif sales >= DISTANCE_SELLING_THRESHOLD:
        result = VATRuleResult(
            rule=VATRuleKind.DISTANCE_SELLING,
            vat_country=buyer,
            rule_description=(f"Destination country VAT in {country_name(buyer)} "
                              f"(exceeds {_THRESHOLD_LABEL} distance selling threshold)"),
            is_distance_selling=True,
            annual_sales=sales,
        )
    else:
        result = VATRuleResult(
            rule=VATRuleKind.ORIGIN_COUNTRY,
            vat_country=seller,
            rule_description=(f"Origin country VAT in {country_name(seller)} "
                              f"(below {_THRESHOLD_LABEL} distance selling threshold)"),
            annual_sales=sales,
        )

    logger.debug("VAT rule %s -> %s for %s->%s", result.rule.value,
                 result.vat_country.value, seller.value, buyer.value)
    return result


def get_applicable_rate(params: VATRuleParams, as_of: _dt.date | None = None) -> Decimal:
    """Rate charged at point of sale: 0 under reverse charge, else the governing standard rate."""
    result = resolve_vat_rule(params)
    if result.is_reverse_charge:
        return Decimal("0")
    return get_standard_rate(result.vat_country, as_of)


def check_vat_registration_required(params: VATRuleParams) -> RegistrationResult:
    result = resolve_vat_rule(params)

    if result.rule is VATRuleKind.REVERSE_CHARGE:
        return RegistrationResult(required=False, countries=[],
                                  reason="No (reverse charge applies)")

    country = {
        VATRuleKind.DOMESTIC: params.seller_country,
        VATRuleKind.LOCAL_SALE: params.storage_country,
        VATRuleKind.DISTANCE_SELLING: params.buyer_country,
        VATRuleKind.ORIGIN_COUNTRY: params.seller_country,
    }[result.rule]
    return RegistrationResult(required=True, countries=[country],
                              reason=f"Yes ({country_name(country)})")


def check_oss_eligibility(params: VATRuleParams) -> OSSResult:
    """OSS covers cross-border B2C distance sales only."""
    result = resolve_vat_rule(params)

    if result.rule is VATRuleKind.DOMESTIC:
        return OSSResult(eligible=False, reason="No (domestic transaction)")
    if result.rule is VATRuleKind.REVERSE_CHARGE:
        return OSSResult(eligible=False, reason="No (B2B reverse charge)")
    if result.rule is VATRuleKind.LOCAL_SALE:
        return OSSResult(eligible=False, reason="No (local sale in storage country)")
    return OSSResult(eligible=True, reason="Yes (cross-border B2C sale)")
