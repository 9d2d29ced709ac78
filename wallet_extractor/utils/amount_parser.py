"""Parse and normalise currency amounts from statement text."""
import re
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from ..config.settings import CURRENCY_SYMBOLS

logger = logging.getLogger(__name__)

ZERO_AMOUNT = "0.00"
TWO_PLACES = Decimal("0.01")

# Digits with optional thousands separators and an optional fraction part
_PLAIN_NUMBER = re.compile(r'^\d+(?:\.\d*)?$')


def normalize_amount(amount_string: Optional[str]) -> str:
    """
    Normalise a numeric token to a two-decimal string.

    Handles:
    - 1,234.5  -> 1234.50
    - 8000.00  -> 8000.00
    - 14       -> 14.00
    - 0.125    -> 0.13 (round half away from zero)

    Never raises: anything that is not a non-negative plain number, or
    that has more digits than the default Decimal context holds, yields
    "0.00".

    Args:
        amount_string: Numeric token, possibly with comma separators

    Returns:
        Decimal string with exactly two fraction digits
    """
    if not amount_string or not isinstance(amount_string, str):
        return ZERO_AMOUNT

    cleaned = amount_string.replace(',', '').strip()

    if not _PLAIN_NUMBER.match(cleaned):
        logger.debug(f"Could not parse amount: {amount_string!r}")
        return ZERO_AMOUNT

    # quantize signals InvalidOperation past the context precision (28 digits)
    try:
        amount = Decimal(cleaned).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.debug(f"Could not parse amount: {amount_string!r}")
        return ZERO_AMOUNT

    return f"{amount:f}"


def to_decimal(amount_string: Optional[str]) -> Decimal:
    """Convert a normalised amount string to Decimal (0 if unparseable)."""
    return Decimal(normalize_amount(amount_string))


def format_currency(amount: Union[str, Decimal], currency: str = "INR") -> str:
    """
    Format amount as currency string.

    Args:
        amount: Normalised amount string or Decimal
        currency: Currency code (INR, GBP, USD, EUR)

    Returns:
        Formatted currency string
    """
    if not isinstance(amount, Decimal):
        amount = to_decimal(amount)

    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency} ")

    # Format with thousands separator and 2 decimal places
    formatted = f"{abs(amount):,.2f}"

    if amount < 0:
        return f"-{symbol}{formatted}"
    else:
        return f"{symbol}{formatted}"
