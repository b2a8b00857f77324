"""Gross/net conversion with input validation and half-up money rounding.

Formulas::

    net = round_money(gross / (1 + rate))     vat = round_money(gross) - net
    vat = round_money(net * rate)             gross = round_money(net + vat)

VAT on the gross side is the residual, so ``net + vat == round_money(gross)``
always holds. Calculations use the unrounded rate; ``round_rate`` is only
applied to the rate echoed back in the result.
"""

from __future__ import annotations

import datetime as _dt
import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from crossborder_vat import config
from crossborder_vat.errors import (
    Failure,
    Result,
    Success,
    VATError,
    VATErrorCode,
    VATValidationError,
)
from crossborder_vat.models.countries import CountryCode
from crossborder_vat.models.rates import get_standard_rate
from crossborder_vat.models.results import NetFromGrossResult, VATFromNetResult

logger = logging.getLogger(__name__)

Number = int | float | Decimal


def round_money(amount: Number) -> Decimal:
    """Round to cents, half-up: 100.125 -> 100.13."""
    return _to_decimal(amount).quantize(config.MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def round_rate(rate: Number) -> Decimal:
    """Round a rate to 3 places for display: 0.1235 -> 0.124."""
    return _to_decimal(rate).quantize(config.RATE_QUANTUM, rounding=ROUND_HALF_UP)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr, so 100.125 stays 100.125
    return Decimal(str(value)) if isinstance(value, float) else Decimal(value)


def _as_finite_decimal(value: object) -> Decimal | None:
    """Decimal for a real, finite number; None for anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    return _to_decimal(value)


def _validate(price: object, vat_rate: object) -> tuple[Decimal, Decimal] | VATValidationError:
    p = _as_finite_decimal(price)
    if p is None:
        return VATValidationError(code=VATErrorCode.INVALID_PRICE_TYPE,
                                  message="Price must be a valid number", field="price")
    if p < 0:
        return VATValidationError(code=VATErrorCode.NEGATIVE_PRICE,
                                  message="Price cannot be negative", field="price")

    r = _as_finite_decimal(vat_rate)
    if r is None:
        return VATValidationError(code=VATErrorCode.INVALID_RATE_TYPE,
                                  message="VAT rate must be a valid number", field="vatRate")
    if r < config.MIN_VAT_RATE or r > config.MAX_VAT_RATE:
        return VATValidationError(
            code=VATErrorCode.RATE_OUT_OF_RANGE,
            message=(f"VAT rate must be between {config.MIN_VAT_RATE * 100:.0f}% "
                     f"and {config.MAX_VAT_RATE * 100:.0f}%"),
            field="vatRate",
        )
    return p, r


def _fail(error: VATValidationError) -> Failure:
    logger.debug("VAT input rejected: %s (%s)", error.code.value, error.field)
    return Failure(error)


def extract_net_from_gross(gross_price: Number, vat_rate: Number) -> Result[NetFromGrossResult]:
    """Split a VAT-inclusive price into net price and VAT.

    The gross is rounded to cents before the net is derived, so sub-cent
    inputs are split as ``round_money(gross)``.

    >>> extract_net_from_gross(119, Decimal("0.19")).data.net_price
    Decimal('100.00')
    """
    checked = _validate(gross_price, vat_rate)
    if isinstance(checked, VATValidationError):
        return _fail(checked)
    gross, rate = checked

    # VAT is the residual of the cent-rounded gross, never negative
    gross = round_money(gross)
    net = round_money(gross / (1 + rate))
    vat = gross - net
    return Success(NetFromGrossResult(net_price=net, vat_amount=vat, vat_rate=round_rate(rate)))


def calculate_vat_from_net(net_price: Number, vat_rate: Number) -> Result[VATFromNetResult]:
    """Add VAT to a net price."""
    checked = _validate(net_price, vat_rate)
    if isinstance(checked, VATValidationError):
        return _fail(checked)
    net, rate = checked

    vat = round_money(net * rate)
    gross = round_money(net + vat)
    return Success(VATFromNetResult(vat_amount=vat, gross_price=gross, vat_rate=round_rate(rate)))


def get_vat_rate_for_country(country: CountryCode | str,
                             as_of: _dt.date | None = None) -> Result[Decimal]:
    try:
        return Success(get_standard_rate(country, as_of))
    except VATError as exc:
        return _fail(exc.to_validation_error())


def extract_net_from_gross_for_country(gross_price: Number, country: CountryCode | str,
                                       as_of: _dt.date | None = None) -> Result[NetFromGrossResult]:
    rate = get_vat_rate_for_country(country, as_of)
    if not rate.success:
        return rate
    return extract_net_from_gross(gross_price, rate.data)


def calculate_vat_from_net_for_country(net_price: Number, country: CountryCode | str,
                                       as_of: _dt.date | None = None) -> Result[VATFromNetResult]:
    rate = get_vat_rate_for_country(country, as_of)
    if not rate.success:
        return rate
    return calculate_vat_from_net(net_price, rate.data)
