"""
Transaction Records

Immutable facts describing one balance-affecting event on an account.
Each record carries the balance snapshot immediately after the event,
so an account's history can be replayed and checked against its balance.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from enum import Enum

from .currency import Currency, format_money


class TransactionType(Enum):
    """Types of balance-affecting events"""
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    INITIAL_DEPOSIT = "Initial Deposit"
    INTEREST_CREDIT = "Interest Credit"
    OVERDRAFT_FEE = "Overdraft Fee"


@dataclass(frozen=True)
class Transaction:
    """
    One entry in an account's transaction history

    Amount is always the non-negative size of the event; the transaction
    type gives its direction.
    """
    transaction_type: TransactionType
    amount: Decimal
    balance_after: Decimal
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    period: str = ""  # Interest period key, only set on guarded interest credits

    @property
    def timestamp_display(self) -> str:
        """Human-readable local time, e.g. 'Mon Oct 19 14:02:11 2026'"""
        return self.timestamp.astimezone().strftime("%a %b %d %H:%M:%S %Y")

    def display(self, currency: Currency = Currency.USD) -> str:
        """Format as a single history line"""
        return (
            f"Type: {self.transaction_type.value} | "
            f"Amount: {format_money(self.amount, currency)} | "
            f"Balance: {format_money(self.balance_after, currency)} | "
            f"Time: {self.timestamp_display}"
        )

