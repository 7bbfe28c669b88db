"""
Currency and Amount Helpers

Decimal conversion, parsing of user-typed amounts and display formatting.
NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, getcontext
from enum import Enum
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28


class Currency(Enum):
    """ISO 4217 Currency Codes with display symbol and precision"""
    USD = ("USD", "$", 2)
    EUR = ("EUR", "€", 2)
    GBP = ("GBP", "£", 2)
    JPY = ("JPY", "¥", 0)

    def __init__(self, code: str, symbol: str, precision: int):
        self.code = code
        self.symbol = symbol
        self.precision = precision


AmountLike = Union[Decimal, int, str, float]


def to_decimal(value: AmountLike) -> Decimal:
    """
    Convert a numeric value to Decimal without going through binary float

    Raises:
        ValueError: If the value cannot be represented as a Decimal
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Cannot convert {value!r} to Decimal")


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number, e.g. "$1,250.50"

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove currency symbols and whitespace; anything else non-numeric is an error
    clean_value = re.sub(r"[\s$€£¥]", "", value)
    if re.search(r"[^\d.,\-+]", clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Thousands separator
            clean_value = clean_value.replace(',', '')

    if not clean_value:
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def format_money(amount: Decimal, currency: Currency = Currency.USD) -> str:
    """Format an amount for display, e.g. $1,234.56 or -$25.00"""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency.symbol}{abs(amount):,.{currency.precision}f}"


def format_rate(rate: Decimal) -> str:
    """Format an annual rate fraction as a percentage, e.g. 0.04 -> 4%"""
    percent = (rate * 100).normalize()
    return f"{percent:f}%"
