"""
Test suite for currency helpers

Tests Decimal conversion, parsing of typed amounts and display formatting.
"""

import pytest
from decimal import Decimal

from banking_ledger.currency import (
    Currency, to_decimal, decimal_from_string, format_money, format_rate
)


class TestToDecimal:
    """Test conversion of numeric input to Decimal"""

    def test_decimal_passthrough(self):
        """Test that Decimals are returned unchanged"""
        value = Decimal('12.34')
        assert to_decimal(value) is value

    def test_int_and_str(self):
        """Test ints and strings convert exactly"""
        assert to_decimal(100) == Decimal('100')
        assert to_decimal("99.95") == Decimal('99.95')

    def test_float_goes_through_str(self):
        """Test floats don't carry binary noise"""
        assert to_decimal(0.1) == Decimal('0.1')

    def test_rejects_garbage(self):
        """Test that non-numeric input raises ValueError"""
        with pytest.raises(ValueError):
            to_decimal("abc")
        with pytest.raises(ValueError):
            to_decimal(True)


class TestDecimalFromString:
    """Test parsing of user-typed amounts"""

    def test_plain_amount(self):
        assert decimal_from_string("250") == Decimal('250')
        assert decimal_from_string(" 100.50 ") == Decimal('100.50')

    def test_currency_symbol_and_thousands(self):
        """Test symbols and thousands separators are stripped"""
        assert decimal_from_string("$1,250.75") == Decimal('1250.75')
        assert decimal_from_string("1,000") == Decimal('1000')

    def test_comma_decimal_separator(self):
        """Test European decimal comma"""
        assert decimal_from_string("12,50") == Decimal('12.50')

    def test_negative(self):
        assert decimal_from_string("-40") == Decimal('-40')

    def test_invalid(self):
        """Test that empty or non-numeric strings are rejected"""
        with pytest.raises(ValueError):
            decimal_from_string("")
        with pytest.raises(ValueError):
            decimal_from_string("abc")
        with pytest.raises(ValueError):
            decimal_from_string("1.2.3")
        with pytest.raises(ValueError):
            decimal_from_string("1e3")
        with pytest.raises(ValueError):
            decimal_from_string("12abc")
        with pytest.raises(ValueError):
            decimal_from_string("10 dollars 5 cents")


class TestFormatting:
    """Test display formatting"""

    def test_format_money(self):
        assert format_money(Decimal('1234.5')) == "$1,234.50"
        assert format_money(Decimal('0')) == "$0.00"

    def test_format_negative_money(self):
        assert format_money(Decimal('-475')) == "-$475.00"

    def test_format_other_currency(self):
        assert format_money(Decimal('1500'), Currency.JPY) == "¥1,500"
        assert format_money(Decimal('10'), Currency.EUR) == "€10.00"

    def test_format_rate(self):
        assert format_rate(Decimal('0.04')) == "4%"
        assert format_rate(Decimal('0.025')) == "2.5%"
