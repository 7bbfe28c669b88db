"""
Operation Outcomes

Every account and ledger command reports its outcome as a value instead of
raising. Failures are recoverable and leave balances and histories untouched;
the caller decides how to surface them.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional
from enum import Enum

from .transactions import Transaction

if TYPE_CHECKING:
    from .accounts import Account


class FailureReason(Enum):
    """Why a command was refused"""
    INVALID_AMOUNT = "invalid_amount"                       # amount <= 0 or not a number
    LIMIT_EXCEEDED = "limit_exceeded"                       # minimum balance / overdraft limit
    ACCOUNT_NOT_FOUND = "account_not_found"                 # lookup miss
    DUPLICATE_ACCOUNT = "duplicate_account"                 # account number already registered
    INTEREST_NOT_SUPPORTED = "interest_not_supported"       # variant earns no interest
    INTEREST_ALREADY_APPLIED = "interest_already_applied"   # period already credited


@dataclass
class OperationResult:
    """
    Structured outcome of a command

    Truthy when the command succeeded, so `if account.withdraw(x):` reads
    naturally.
    """
    success: bool
    message: str
    reason: Optional[FailureReason] = None
    balance: Optional[Decimal] = None
    amount: Optional[Decimal] = None
    account: Optional['Account'] = None
    transactions: List[Transaction] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @property
    def account_number(self) -> Optional[str]:
        return self.account.account_number if self.account else None

    @classmethod
    def ok(
        cls,
        message: str,
        balance: Optional[Decimal] = None,
        amount: Optional[Decimal] = None,
        account: Optional['Account'] = None,
        transactions: Optional[List[Transaction]] = None
    ) -> 'OperationResult':
        """Build a successful result"""
        return cls(
            success=True,
            message=message,
            balance=balance,
            amount=amount,
            account=account,
            transactions=list(transactions or []),
        )

    @classmethod
    def fail(
        cls,
        reason: FailureReason,
        message: str,
        balance: Optional[Decimal] = None,
        account: Optional['Account'] = None
    ) -> 'OperationResult':
        """Build a failed result"""
        return cls(
            success=False,
            message=message,
            reason=reason,
            balance=balance,
            account=account,
        )
