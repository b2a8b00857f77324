"""Product categories and the rate column each one prefers.

A plain lookup table: it does not decide whether a given product legally
qualifies for a reduced rate in a given country.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from crossborder_vat.models.countries import country_name, parse_country
from crossborder_vat.models.rates import VATRateType, get_rate_by_type, get_standard_rate
from crossborder_vat.models.results import VATRate


class ProductCategory(str, Enum):
    STANDARD = "standard"
    BOOKS = "books"
    FOOD = "food"
    MEDICINES = "medicines"
    CHILDREN_CLOTHING = "children_clothing"
    ELECTRONICS = "electronics"
    ACCOMMODATION = "accommodation"
    CULTURAL = "cultural"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class CategoryRule:
    category: ProductCategory
    rate_type: VATRateType
    description: str


CATEGORY_RULES = MappingProxyType({
    ProductCategory.STANDARD: CategoryRule(ProductCategory.STANDARD, VATRateType.STANDARD,
                                           "General goods"),
    ProductCategory.BOOKS: CategoryRule(ProductCategory.BOOKS, VATRateType.REDUCED1,
                                        "Books, newspapers, periodicals"),
    ProductCategory.FOOD: CategoryRule(ProductCategory.FOOD, VATRateType.REDUCED1,
                                       "Foodstuffs for human consumption"),
    ProductCategory.MEDICINES: CategoryRule(ProductCategory.MEDICINES, VATRateType.REDUCED1,
                                            "Pharmaceutical products"),
    ProductCategory.CHILDREN_CLOTHING: CategoryRule(ProductCategory.CHILDREN_CLOTHING,
                                                    VATRateType.REDUCED1,
                                                    "Children's clothing and footwear"),
    ProductCategory.ELECTRONICS: CategoryRule(ProductCategory.ELECTRONICS, VATRateType.STANDARD,
                                              "Consumer electronics"),
    ProductCategory.ACCOMMODATION: CategoryRule(ProductCategory.ACCOMMODATION,
                                                VATRateType.REDUCED2,
                                                "Hotel and holiday accommodation"),
    ProductCategory.CULTURAL: CategoryRule(ProductCategory.CULTURAL, VATRateType.REDUCED1,
                                           "Cultural events, museums"),
    ProductCategory.TRANSPORT: CategoryRule(ProductCategory.TRANSPORT, VATRateType.REDUCED2,
                                            "Passenger transport"),
})


def list_categories() -> list[CategoryRule]:
    return sorted(CATEGORY_RULES.values(), key=lambda r: r.category.value)


def get_vat_rate(country, category: ProductCategory | str = ProductCategory.STANDARD,
                 as_of: _dt.date | None = None) -> VATRate:
    """Resolve the rate for ``category`` in ``country``.

    Falls back to the standard rate when the country has no rate in the
    category's preferred column (Denmark never has one).
    """
    code = parse_country(country)
    rule = CATEGORY_RULES[ProductCategory(category)]

    rate = get_rate_by_type(code, rule.rate_type, as_of)
    if rule.rate_type is VATRateType.STANDARD:
        return VATRate(rate=rate, rate_type=VATRateType.STANDARD, country=code,
                       rule_applied=f"Standard rate in {country_name(code)}")
    if rate is None:
        return VATRate(
            rate=get_standard_rate(code, as_of),
            rate_type=VATRateType.STANDARD,
            country=code,
            rule_applied=(f"Standard rate in {country_name(code)} "
                          f"(no {rule.rate_type.value} rate for {rule.category.value})"),
        )
    return VATRate(rate=rate, rate_type=rule.rate_type, country=code,
                   rule_applied=f"{rule.rate_type.value} rate in {country_name(code)} "
                                f"for {rule.category.value}")
