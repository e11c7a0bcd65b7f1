"""Currency helpers: conversion between display amounts and integer minor units."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from tripsplit.errors import InvalidInput

DEFAULT_CURRENCY = "INR"

# Minor-unit precision per currency
CURRENCY_DECIMALS: dict[str, int] = {
    "INR": 2,
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "JPY": 0,
    "KRW": 0,
}

# One minor unit, in minor units
EPSILON_MINOR = 1


def decimals_for(currency: str = DEFAULT_CURRENCY) -> int:
    return CURRENCY_DECIMALS.get(currency, 2)


def epsilon(currency: str = DEFAULT_CURRENCY) -> Decimal:
    """Smallest amount that is not treated as zero (one minor unit)."""
    return Decimal(1).scaleb(-decimals_for(currency))


def _as_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise InvalidInput(f"Not a monetary amount: {amount!r}")
    try:
        # str() first so floats like 0.1 keep their display value
        return Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInput(f"Not a monetary amount: {amount!r}") from exc


def round2(amount, currency: str = DEFAULT_CURRENCY) -> Decimal:
    """Round to the currency's minor unit, half away from zero."""
    value = _as_decimal(amount)
    if not value.is_finite():
        raise InvalidInput(f"Not a monetary amount: {amount!r}")
    return value.quantize(epsilon(currency), rounding=ROUND_HALF_UP)


def to_minor(amount, currency: str = DEFAULT_CURRENCY) -> int:
    """Convert a display amount (e.g. 12.50) to integer minor units (1250)."""
    rounded = round2(amount, currency)
    return int(rounded.scaleb(decimals_for(currency)))


def from_minor(amount: int, currency: str = DEFAULT_CURRENCY) -> Decimal:
    """Convert integer minor units back to a display Decimal with fixed places."""
    return Decimal(amount).scaleb(-decimals_for(currency)).quantize(epsilon(currency))
