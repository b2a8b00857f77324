"""Cross-border VAT rates, gross/net conversion and jurisdiction rules."""

from crossborder_vat.breakdown import calculate_vat_breakdown
from crossborder_vat.calculator import (
    calculate_vat_from_net,
    calculate_vat_from_net_for_country,
    extract_net_from_gross,
    extract_net_from_gross_for_country,
    get_vat_rate_for_country,
    round_money,
    round_rate,
)
from crossborder_vat.errors import (
    Failure,
    Success,
    UnknownCountryError,
    VATError,
    VATErrorCode,
    VATValidationError,
)
from crossborder_vat.models.categories import ProductCategory, get_vat_rate
from crossborder_vat.models.countries import (
    COUNTRY_NAMES,
    EU_COUNTRIES,
    CountryCode,
    country_name,
    is_eu_member,
    parse_country,
)
from crossborder_vat.models.rates import (
    RATE_CHANGES,
    VAT_RATES,
    CountryVATRates,
    RateChange,
    VATRateType,
    get_country_rates,
    get_standard_rate,
    has_reduced_rates,
)
from crossborder_vat.models.results import (
    NetFromGrossResult,
    VATBreakdown,
    VATFromNetResult,
    VATRate,
)
from crossborder_vat.rules import (
    DISTANCE_SELLING_THRESHOLD,
    FulfillmentMethod,
    OSSResult,
    RegistrationResult,
    TransactionType,
    VATRuleKind,
    VATRuleParams,
    VATRuleResult,
    check_oss_eligibility,
    check_vat_registration_required,
    get_applicable_rate,
    resolve_vat_rule,
)

__version__ = "0.1.0"
