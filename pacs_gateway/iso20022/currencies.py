"""
Currency reference data: ISO 4217 minor units.

Amounts are carried in integer minor units inside the typed records and
rendered back with exactly the currency's number of decimal places.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from ..config import settings
from ..errors import InvalidAmountError
from .constants import CURRENCY_PATTERN, DECIMAL_AMOUNT_PATTERN, MAX_AMOUNT_DIGITS

logger = logging.getLogger(__name__)

# Currencies whose minor unit differs from the usual 2 decimal places
MINOR_UNITS: dict[str, int] = {
    # No decimals
    "BIF": 0, "CLP": 0, "DJF": 0, "GNF": 0, "ISK": 0, "JPY": 0, "KMF": 0,
    "KRW": 0, "PYG": 0, "RWF": 0, "UGX": 0, "UYI": 0, "VND": 0, "VUV": 0,
    "XAF": 0, "XOF": 0, "XPF": 0,
    # Three decimals
    "BHD": 3, "IQD": 3, "JOD": 3, "KWD": 3, "LYD": 3, "OMR": 3, "TND": 3,
    # Four decimals
    "CLF": 4, "UYW": 4,
}

TWO_DECIMAL_CURRENCIES = {
    "AED", "AUD", "BRL", "CAD", "CHF", "CNY", "CZK", "DKK", "EUR", "GBP",
    "HKD", "IDR", "INR", "MUR", "MXN", "MYR", "NOK", "NZD", "PHP", "PLN",
    "SEK", "SGD", "THB", "TRY", "USD", "ZAR",
}


def minor_unit_exponent(currency: str) -> int:
    """Number of decimal places for ``currency``."""
    code = (currency or "").strip().upper()
    if not CURRENCY_PATTERN.match(code):
        raise InvalidAmountError(f"Invalid currency code: {currency!r}", element="Ccy")
    if code in MINOR_UNITS:
        return MINOR_UNITS[code]
    if code not in TWO_DECIMAL_CURRENCIES:
        logger.debug(
            "Currency %s not in minor unit table, assuming %d decimals",
            code, settings.default_minor_units,
        )
        return settings.default_minor_units
    return 2


def _total_digits(text: str) -> int:
    integer, _, fraction = text.partition(".")
    return len(integer.lstrip("0")) + len(fraction.rstrip("0"))


def to_minor_units(value, currency: str) -> int:
    """
    Convert a major-unit decimal amount to integer minor units.

    ``"1000.00" EUR -> 100000``, ``"1500" JPY -> 1500``. Extra precision
    beyond the currency's exponent is rounded half-up. Only plain decimal
    notation with at most 18 significant digits is accepted
    (ActiveCurrencyAndAmount).
    """
    text = str(value).strip()
    if not DECIMAL_AMOUNT_PATTERN.match(text):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if _total_digits(text) > MAX_AMOUNT_DIGITS:
        raise InvalidAmountError(
            f"Amount {value!r} exceeds {MAX_AMOUNT_DIGITS} digits"
        )

    exponent = minor_unit_exponent(currency)
    try:
        scaled = Decimal(text).scaleb(exponent)
        minor = scaled.to_integral_value(rounding=ROUND_HALF_UP)
    except ArithmeticError as e:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from e
    if minor != scaled:
        logger.warning(
            "Amount %s %s has more than %d decimals, rounded to %s minor units",
            value, currency, exponent, minor,
        )
    return int(minor)


def from_minor_units(amount: int, currency: str) -> str:
    """Render integer minor units as a decimal string (``100000 EUR -> "1000.00"``)."""
    if amount < 0:
        raise InvalidAmountError(f"Negative amount: {amount}")
    exponent = minor_unit_exponent(currency)
    major = Decimal(int(amount)).scaleb(-exponent)
    return f"{major:.{exponent}f}"
