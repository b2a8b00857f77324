"""VAT rate table for all 30 jurisdictions, plus scheduled rate changes.

All rates are decimals (``Decimal("0.19")`` is 19%). Source: EU VAT
directive and national tax authorities, last verified October 2025.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Optional

from crossborder_vat import config
from crossborder_vat.errors import UnknownCountryError
from crossborder_vat.models.countries import COUNTRY_NAMES, CountryCode, parse_country


class VATRateType(str, Enum):
    STANDARD = "standard"
    REDUCED1 = "reduced1"
    REDUCED2 = "reduced2"
    SUPER_REDUCED = "super_reduced"
    ZERO = "zero"


@dataclass(frozen=True)
class CountryVATRates:
    country: CountryCode
    display_name: str
    standard_rate: Decimal
    reduced_rate_1: Optional[Decimal] = None
    reduced_rate_2: Optional[Decimal] = None
    super_reduced_rate: Optional[Decimal] = None
    notes: str = ""
    effective_date: Optional[_dt.date] = None


@dataclass(frozen=True)
class RateChange:
    """A standard-rate change taking effect on (and including) change_date."""

    country: CountryCode
    change_date: _dt.date
    rate_before: Decimal
    rate_after: Decimal

    def rate_on(self, as_of: _dt.date) -> Decimal:
        return self.rate_after if as_of >= self.change_date else self.rate_before


def _entry(code: CountryCode, standard: str, reduced1: str | None = None,
           reduced2: str | None = None, super_reduced: str | None = None,
           notes: str = "", effective: str | None = None) -> tuple[CountryCode, CountryVATRates]:
    return code, CountryVATRates(
        country=code,
        display_name=COUNTRY_NAMES[code],
        standard_rate=Decimal(standard),
        reduced_rate_1=Decimal(reduced1) if reduced1 else None,
        reduced_rate_2=Decimal(reduced2) if reduced2 else None,
        super_reduced_rate=Decimal(super_reduced) if super_reduced else None,
        notes=notes,
        effective_date=_dt.date.fromisoformat(effective) if effective else None,
    )


C = CountryCode

VAT_RATES = MappingProxyType(dict([
    _entry(C.AT, "0.20", "0.10"),                     # food, books, medicines
    _entry(C.BE, "0.21", "0.06"),
    _entry(C.BG, "0.20", "0.09"),
    _entry(C.HR, "0.25", "0.05"),
    _entry(C.CY, "0.19", "0.05"),
    _entry(C.CZ, "0.21", "0.12"),
    _entry(C.DK, "0.25",
           notes="Denmark has no reduced rates. All products are 25% regardless of category."),
    _entry(C.EE, "0.22", "0.09",
           notes="Rate changes from 22% to 24% on July 1, 2025", effective="2025-07-01"),
    _entry(C.FI, "0.255", "0.10"),
    _entry(C.FR, "0.20", "0.055", "0.10"),            # reduced2: restaurants, hotels
    _entry(C.DE, "0.19", "0.07"),                     # food, books, newspapers
    _entry(C.EL, "0.24", "0.06", "0.13"),
    _entry(C.HU, "0.27", "0.05", notes="Highest standard VAT rate in the EU"),
    _entry(C.IE, "0.23", "0.09", "0.135"),            # reduced2: fuel, electricity
    _entry(C.IT, "0.22", "0.10", "0.05"),
    _entry(C.LV, "0.21", "0.12"),
    _entry(C.LT, "0.21", "0.05"),
    _entry(C.LU, "0.17", "0.08", notes="Lowest standard VAT rate in the EU"),
    _entry(C.MT, "0.18", "0.05"),
    _entry(C.NL, "0.21", "0.09"),
    _entry(C.PL, "0.23", "0.05"),
    _entry(C.PT, "0.23", "0.06", "0.13"),
    _entry(C.RO, "0.19", "0.05",
           notes="Rate changes from 19% to 21% on August 1, 2025", effective="2025-08-01"),
    _entry(C.SK, "0.23", "0.10", notes="Increased from 20% to 23% in January 2025"),
    _entry(C.SI, "0.22", "0.095"),
    _entry(C.ES, "0.21", "0.10", super_reduced="0.04"),  # basic food
    _entry(C.SE, "0.25", "0.06"),
    _entry(C.UK, "0.20", "0.05", notes="Post-Brexit rates"),
    _entry(C.CH, "0.081", "0.026", notes="Not EU member"),
    _entry(C.NO, "0.25", "0.15", notes="Not EU member"),
]))

RATE_CHANGES = MappingProxyType({
    C.EE: RateChange(C.EE, _dt.date(2025, 7, 1), Decimal("0.22"), Decimal("0.24")),
    C.RO: RateChange(C.RO, _dt.date(2025, 8, 1), Decimal("0.19"), Decimal("0.21")),
})

del C


def _as_date(as_of: _dt.date | None) -> _dt.date:
    if as_of is None:
        return config.today()
    if isinstance(as_of, _dt.datetime):
        return as_of.date()
    return as_of


def get_country_rates(country: CountryCode | str) -> CountryVATRates | None:
    """Table entry for a supported code; raises UnknownCountryError for any other."""
    return VAT_RATES.get(parse_country(country))


def has_reduced_rates(country: CountryCode | str) -> bool:
    rates = get_country_rates(country)
    if rates is None:
        return False
    return any(r is not None for r in (rates.reduced_rate_1, rates.reduced_rate_2,
                                       rates.super_reduced_rate))


def get_standard_rate(country: CountryCode | str, as_of: _dt.date | None = None) -> Decimal:
    """Standard rate for ``country`` on ``as_of`` (default: today).

    Scheduled changes are authoritative from their change date onwards.
    """
    code = parse_country(country)
    change = RATE_CHANGES.get(code)
    if change is not None:
        return change.rate_on(_as_date(as_of))

    rates = VAT_RATES.get(code)
    if rates is None:
        raise UnknownCountryError(country)
    return rates.standard_rate


def get_rate_by_type(country: CountryCode | str, rate_type: VATRateType,
                     as_of: _dt.date | None = None) -> Decimal | None:
    """Return one rate column for a country, or None if the country has none."""
    if rate_type is VATRateType.STANDARD:
        return get_standard_rate(country, as_of)
    if rate_type is VATRateType.ZERO:
        return Decimal("0")

    rates = VAT_RATES.get(parse_country(country))
    if rates is None:
        raise UnknownCountryError(country)
    return {
        VATRateType.REDUCED1: rates.reduced_rate_1,
        VATRateType.REDUCED2: rates.reduced_rate_2,
        VATRateType.SUPER_REDUCED: rates.super_reduced_rate,
    }[rate_type]
