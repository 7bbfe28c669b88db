"""
Banking Ledger

A small in-memory banking ledger with savings and current accounts,
Decimal balances, monthly interest and per-account transaction history.
"""

__version__ = "1.0.0"
