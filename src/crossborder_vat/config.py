"""Configuration: environment overrides, numeric bounds, defaults."""

import os
from datetime import date
from decimal import Decimal

# Pin "today" for default rate lookups (ISO date, e.g. 2025-07-01)
AS_OF_OVERRIDE = os.environ.get("VAT_ENGINE_AS_OF", "")

# Log level the CLI applies to the crossborder_vat loggers
LOG_LEVEL = os.environ.get("VAT_ENGINE_LOG_LEVEL", "WARNING").upper()

# Amounts are always EUR; no currency conversion happens here
DEFAULT_CURRENCY = "EUR"

MONEY_QUANTUM = Decimal("0.01")    # 2 places for money
RATE_QUANTUM = Decimal("0.001")    # 3 places for displayed rates

# Sanity bounds: catches 19 passed instead of 0.19
MIN_VAT_RATE = Decimal("0")
MAX_VAT_RATE = Decimal("0.30")


def today() -> date:
    """Calculation date used when the caller passes no as_of."""
    if AS_OF_OVERRIDE:
        return date.fromisoformat(AS_OF_OVERRIDE)
    return date.today()
