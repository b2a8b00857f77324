"""Supported VAT jurisdictions: 27 EU member states plus UK, CH and NO."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from crossborder_vat.errors import UnknownCountryError


class CountryCode(str, Enum):
    """VAT country prefixes (Greece is EL, United Kingdom is UK)."""

    AT = "AT"
    BE = "BE"
    BG = "BG"
    HR = "HR"
    CY = "CY"
    CZ = "CZ"
    DK = "DK"
    EE = "EE"
    FI = "FI"
    FR = "FR"
    DE = "DE"
    EL = "EL"
    HU = "HU"
    IE = "IE"
    IT = "IT"
    LV = "LV"
    LT = "LT"
    LU = "LU"
    MT = "MT"
    NL = "NL"
    PL = "PL"
    PT = "PT"
    RO = "RO"
    SK = "SK"
    SI = "SI"
    ES = "ES"
    SE = "SE"
    UK = "UK"
    CH = "CH"
    NO = "NO"


COUNTRY_NAMES = MappingProxyType({
    CountryCode.AT: "Austria",
    CountryCode.BE: "Belgium",
    CountryCode.BG: "Bulgaria",
    CountryCode.HR: "Croatia",
    CountryCode.CY: "Cyprus",
    CountryCode.CZ: "Czech Republic",
    CountryCode.DK: "Denmark",
    CountryCode.EE: "Estonia",
    CountryCode.FI: "Finland",
    CountryCode.FR: "France",
    CountryCode.DE: "Germany",
    CountryCode.EL: "Greece",
    CountryCode.HU: "Hungary",
    CountryCode.IE: "Ireland",
    CountryCode.IT: "Italy",
    CountryCode.LV: "Latvia",
    CountryCode.LT: "Lithuania",
    CountryCode.LU: "Luxembourg",
    CountryCode.MT: "Malta",
    CountryCode.NL: "Netherlands",
    CountryCode.PL: "Poland",
    CountryCode.PT: "Portugal",
    CountryCode.RO: "Romania",
    CountryCode.SK: "Slovakia",
    CountryCode.SI: "Slovenia",
    CountryCode.ES: "Spain",
    CountryCode.SE: "Sweden",
    CountryCode.UK: "United Kingdom",
    CountryCode.CH: "Switzerland",
    CountryCode.NO: "Norway",
})

NON_EU_COUNTRIES = frozenset({CountryCode.UK, CountryCode.CH, CountryCode.NO})
EU_COUNTRIES = frozenset(c for c in CountryCode if c not in NON_EU_COUNTRIES)


def parse_country(value: CountryCode | str) -> CountryCode:
    """Coerce ``"de"``/``" DE "``/``CountryCode.DE`` to a CountryCode.

    Anything outside the 30 supported codes raises UnknownCountryError.
    """
    if isinstance(value, CountryCode):
        return value
    if not isinstance(value, str):
        raise UnknownCountryError(value)
    try:
        return CountryCode(value.strip().upper())
    except ValueError:
        raise UnknownCountryError(value) from None


def country_name(country: CountryCode | str) -> str:
    return COUNTRY_NAMES[parse_country(country)]


def is_eu_member(country: CountryCode | str) -> bool:
    return parse_country(country) in EU_COUNTRIES
