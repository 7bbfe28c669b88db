"""
Account Management Module

Accounts own a Decimal balance and an append-only transaction history.
There are two variants sharing one record type: Savings accounts earn
monthly interest and keep a minimum balance, Current accounts may go
overdrawn down to a limit and pay a fee each time a withdrawal leaves
them negative.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import List, Optional, Union
from enum import Enum

from .currency import AmountLike, Currency, format_money, format_rate, to_decimal
from .transactions import Transaction, TransactionType
from .results import FailureReason, OperationResult
from .logging_config import get_logger, log_action


logger = get_logger("banking_ledger.accounts")

MONTHS_PER_YEAR = Decimal('12')


class AccountVariant(Enum):
    """Account policies offered by the bank"""
    SAVINGS = "Savings"
    CURRENT = "Current"


@dataclass(frozen=True)
class SavingsPolicy:
    """Interest and minimum balance rules for savings accounts"""
    interest_rate: Decimal = Decimal('0.04')      # Annual rate as a fraction
    minimum_balance: Decimal = Decimal('100.00')

    def __post_init__(self):
        object.__setattr__(self, 'interest_rate', to_decimal(self.interest_rate))
        object.__setattr__(self, 'minimum_balance', to_decimal(self.minimum_balance))

        if self.interest_rate < Decimal('0') or self.interest_rate > Decimal('1'):
            raise ValueError("Annual interest rate must be between 0 and 1 (0-100%)")
        if self.minimum_balance < Decimal('0'):
            raise ValueError("Minimum balance cannot be negative")


@dataclass(frozen=True)
class CurrentPolicy:
    """Overdraft rules for current accounts"""
    overdraft_limit: Decimal = Decimal('1000.00')
    overdraft_fee: Decimal = Decimal('25.00')

    def __post_init__(self):
        object.__setattr__(self, 'overdraft_limit', to_decimal(self.overdraft_limit))
        object.__setattr__(self, 'overdraft_fee', to_decimal(self.overdraft_fee))

        if self.overdraft_limit < Decimal('0'):
            raise ValueError("Overdraft limit cannot be negative")
        if self.overdraft_fee < Decimal('0'):
            raise ValueError("Overdraft fee cannot be negative")


AccountPolicy = Union[SavingsPolicy, CurrentPolicy]

_POLICY_TYPES = {
    AccountVariant.SAVINGS: SavingsPolicy,
    AccountVariant.CURRENT: CurrentPolicy,
}


def default_policy(variant: AccountVariant, **overrides) -> AccountPolicy:
    """Build the policy record for a variant, with optional field overrides"""
    policy_type = _POLICY_TYPES.get(variant)
    if policy_type is None:
        raise ValueError(f"Unknown account variant: {variant!r}")
    try:
        return policy_type(**overrides)
    except TypeError as e:
        raise ValueError(f"Invalid {variant.value} policy option: {e}")


def _valid_amount(amount: AmountLike) -> Optional[Decimal]:
    """Return amount as a positive finite Decimal, or None"""
    try:
        value = to_decimal(amount)
    except ValueError:
        return None
    if not value.is_finite() or value <= Decimal('0'):
        return None
    return value


@dataclass
class Account:
    """
    Bank account tagged with its variant

    The balance always equals the balance_after of the last transaction in
    the history, or the opening balance while the history is empty.
    """
    account_number: str
    holder_name: str
    variant: AccountVariant
    policy: AccountPolicy
    balance: Decimal = Decimal('0')
    currency: Currency = Currency.USD
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    transaction_history: List[Transaction] = field(default_factory=list)

    def __post_init__(self):
        if not self.account_number:
            raise ValueError("Account number is required")

        expected = _POLICY_TYPES.get(self.variant)
        if expected is None:
            raise ValueError(f"Unknown account variant: {self.variant!r}")
        if not isinstance(self.policy, expected):
            raise ValueError(f"{self.variant.value} account requires a {expected.__name__}")

        self.balance = to_decimal(self.balance)

    @classmethod
    def open(
        cls,
        variant: AccountVariant,
        account_number: str,
        holder_name: str,
        initial_balance: AmountLike = Decimal('0'),
        policy: Optional[AccountPolicy] = None,
        currency: Currency = Currency.USD
    ) -> 'Account':
        """
        Open a new account, recording an Initial Deposit when the opening
        balance is positive

        Raises:
            ValueError: If the opening balance is negative or not a number
        """
        opening = to_decimal(initial_balance)
        if not opening.is_finite() or opening < Decimal('0'):
            raise ValueError("Initial balance cannot be negative")

        account = cls(
            account_number=account_number,
            holder_name=holder_name,
            variant=variant,
            policy=policy if policy is not None else default_policy(variant),
            balance=opening,
            currency=currency
        )
        if opening > Decimal('0'):
            account._record_transaction(TransactionType.INITIAL_DEPOSIT, opening)
        return account

    @classmethod
    def open_savings(cls, account_number: str, holder_name: str,
                     initial_balance: AmountLike = Decimal('0'), **policy_options) -> 'Account':
        """Open a savings account"""
        return cls.open(
            AccountVariant.SAVINGS, account_number, holder_name, initial_balance,
            policy=default_policy(AccountVariant.SAVINGS, **policy_options)
        )

    @classmethod
    def open_current(cls, account_number: str, holder_name: str,
                     initial_balance: AmountLike = Decimal('0'), **policy_options) -> 'Account':
        """Open a current account"""
        return cls.open(
            AccountVariant.CURRENT, account_number, holder_name, initial_balance,
            policy=default_policy(AccountVariant.CURRENT, **policy_options)
        )

    @property
    def is_savings(self) -> bool:
        return self.variant == AccountVariant.SAVINGS

    @property
    def is_current(self) -> bool:
        return self.variant == AccountVariant.CURRENT

    @property
    def supports_interest(self) -> bool:
        """Check if account earns interest"""
        return self.is_savings

    @property
    def is_overdrawn(self) -> bool:
        return self.balance < Decimal('0')

    @property
    def interest_rate(self) -> Optional[Decimal]:
        return self.policy.interest_rate if self.is_savings else None

    @property
    def minimum_balance(self) -> Optional[Decimal]:
        return self.policy.minimum_balance if self.is_savings else None

    @property
    def overdraft_limit(self) -> Optional[Decimal]:
        return self.policy.overdraft_limit if self.is_current else None

    @property
    def overdraft_fee(self) -> Optional[Decimal]:
        return self.policy.overdraft_fee if self.is_current else None

    @property
    def last_transaction(self) -> Optional[Transaction]:
        return self.transaction_history[-1] if self.transaction_history else None

    def get_account_type(self) -> str:
        """Stable variant tag: "Savings" or "Current" """
        return self.variant.value

    def _money(self, amount: Decimal) -> str:
        return format_money(amount, self.currency)

    def _record_transaction(self, transaction_type: TransactionType, amount: Decimal,
                            period: str = "") -> Transaction:
        """Append a transaction snapshotting the already-updated balance"""
        transaction = Transaction(
            transaction_type=transaction_type,
            amount=amount,
            balance_after=self.balance,
            period=period
        )
        self.transaction_history.append(transaction)
        return transaction

    def _reject(self, reason: FailureReason, message: str, action: str,
                amount: Optional[AmountLike] = None) -> OperationResult:
        log_action(
            logger, "warning", message,
            account_number=self.account_number, action=action,
            amount=str(amount) if amount is not None else None,
            extra={"reason": reason.value}
        )
        return OperationResult.fail(reason, message, balance=self.balance, account=self)

    def deposit(self, amount: AmountLike) -> OperationResult:
        """
        Add money to the account

        Args:
            amount: Positive amount to deposit

        Returns:
            OperationResult with the new balance, or INVALID_AMOUNT
        """
        value = _valid_amount(amount)
        if value is None:
            return self._reject(
                FailureReason.INVALID_AMOUNT, "Invalid deposit amount!", "deposit", amount
            )

        self.balance += value
        transaction = self._record_transaction(TransactionType.DEPOSIT, value)

        message = f"Deposited {self._money(value)}. New balance: {self._money(self.balance)}"
        log_action(
            logger, "info", message,
            account_number=self.account_number, action="deposit", amount=str(value)
        )
        return OperationResult.ok(
            message, balance=self.balance, amount=value, account=self,
            transactions=[transaction]
        )

    def _withdrawal_limit_error(self, amount: Decimal) -> Optional[str]:
        """Check the variant's limit; return a failure message or None"""
        if self.variant == AccountVariant.SAVINGS:
            if self.balance - amount < self.policy.minimum_balance:
                return (f"Withdrawal failed! Minimum balance of "
                        f"{self._money(self.policy.minimum_balance)} must be maintained.")
        elif self.variant == AccountVariant.CURRENT:
            if self.balance - amount < -self.policy.overdraft_limit:
                return (f"Withdrawal failed! Overdraft limit of "
                        f"{self._money(self.policy.overdraft_limit)} exceeded.")
        return None

    def withdraw(self, amount: AmountLike) -> OperationResult:
        """
        Take money out of the account, subject to the variant's limit

        A current account left negative is charged its overdraft fee as a
        second transaction after the withdrawal itself.

        Returns:
            OperationResult, truthy on success. Failures append nothing.
        """
        value = _valid_amount(amount)
        if value is None:
            return self._reject(
                FailureReason.INVALID_AMOUNT, "Invalid withdrawal amount!", "withdraw", amount
            )

        limit_error = self._withdrawal_limit_error(value)
        if limit_error:
            return self._reject(FailureReason.LIMIT_EXCEEDED, limit_error, "withdraw", value)

        self.balance -= value
        recorded = [self._record_transaction(TransactionType.WITHDRAWAL, value)]
        messages = []

        if self.variant == AccountVariant.CURRENT and self.balance < Decimal('0'):
            fee = self.policy.overdraft_fee
            self.balance -= fee
            recorded.append(self._record_transaction(TransactionType.OVERDRAFT_FEE, fee))
            messages.append(f"Overdraft fee of {self._money(fee)} applied.")
            log_action(
                logger, "info", "Overdraft fee charged",
                account_number=self.account_number, action="overdraft_fee", amount=str(fee)
            )

        messages.append(f"Withdrew {self._money(value)}. New balance: {self._money(self.balance)}")
        message = "\n".join(messages)
        log_action(
            logger, "info", messages[-1],
            account_number=self.account_number, action="withdraw", amount=str(value)
        )
        return OperationResult.ok(
            message, balance=self.balance, amount=value, account=self,
            transactions=recorded
        )

    def interest_applied_for(self, period: str) -> bool:
        """Check if an interest credit was already recorded for a period key"""
        return any(
            t.transaction_type == TransactionType.INTEREST_CREDIT and t.period == period
            for t in self.transaction_history
        )

    def apply_interest(self, period: Optional[str] = None) -> OperationResult:
        """
        Credit one month of interest: balance * annual rate / 12

        Args:
            period: Optional period key (e.g. "2026-10"). When given, a second
                    call for the same key is refused. Without it every call
                    credits interest on the then-current balance.
        """
        if not self.supports_interest:
            return self._reject(
                FailureReason.INTEREST_NOT_SUPPORTED,
                f"{self.get_account_type()} accounts do not earn interest.",
                "apply_interest"
            )

        if period and self.interest_applied_for(period):
            return self._reject(
                FailureReason.INTEREST_ALREADY_APPLIED,
                f"Interest for period {period} already applied.",
                "apply_interest"
            )

        interest = self.balance * self.policy.interest_rate / MONTHS_PER_YEAR
        self.balance += interest
        transaction = self._record_transaction(
            TransactionType.INTEREST_CREDIT, interest, period=period or ""
        )

        message = (f"Interest of {self._money(interest)} applied. "
                   f"New balance: {self._money(self.balance)}")
        log_action(
            logger, "info", message,
            account_number=self.account_number, action="apply_interest",
            amount=str(interest), extra={"period": period} if period else None
        )
        return OperationResult.ok(
            message, balance=self.balance, amount=interest, account=self,
            transactions=[transaction]
        )

    def describe(self) -> str:
        """Formatted snapshot of identity, balance and policy"""
        lines = [
            f"=== {self.get_account_type()} Account Information ===",
            f"Account Number: {self.account_number}",
            f"Account Holder: {self.holder_name}",
            f"Account Type: {self.get_account_type()}",
            f"Current Balance: {self._money(self.balance)}",
        ]
        if self.variant == AccountVariant.SAVINGS:
            lines.append(f"Interest Rate: {format_rate(self.policy.interest_rate)} per annum")
            lines.append(f"Minimum Balance: {self._money(self.policy.minimum_balance)}")
        elif self.variant == AccountVariant.CURRENT:
            lines.append(f"Overdraft Limit: {self._money(self.policy.overdraft_limit)}")
            lines.append(f"Overdraft Fee: {self._money(self.policy.overdraft_fee)}")
            if self.is_overdrawn:
                lines.append("*** ACCOUNT OVERDRAWN ***")
        return "\n".join(lines)

    def list_history(self) -> List[Transaction]:
        """Ordered copy of the transaction history"""
        return list(self.transaction_history)

    def format_history(self) -> str:
        """Transaction history as display lines"""
        header = f"=== Transaction History for {self.account_number} ==="
        if not self.transaction_history:
            return f"{header}\nNo transactions found."
        lines = [header]
        lines.extend(t.display(self.currency) for t in self.transaction_history)
        return "\n".join(lines)

    def to_summary(self) -> 'AccountSummary':
        return AccountSummary(
            account_number=self.account_number,
            holder_name=self.holder_name,
            account_type=self.get_account_type(),
            balance=self.balance,
            currency=self.currency
        )


@dataclass(frozen=True)
class AccountSummary:
    """Read-only reporting row for one account"""
    account_number: str
    holder_name: str
    account_type: str
    balance: Decimal
    currency: Currency = Currency.USD

    def display(self) -> str:
        return (
            f"Account: {self.account_number} | Holder: {self.holder_name} | "
            f"Type: {self.account_type} | Balance: {format_money(self.balance, self.currency)}"
        )
