"""
Ledger Module

The bank-level registry that owns every account. Accounts are kept in
insertion order with an index by account number; callers get borrowed
references and never take ownership. The ledger also exposes the command
set used by the interactive shell, each command reporting an
OperationResult.
"""

from decimal import Decimal
from typing import Dict, Iterator, List, Optional, Union

from .currency import AmountLike, Currency, format_money
from .accounts import Account, AccountSummary, AccountVariant, default_policy
from .results import FailureReason, OperationResult
from .config import LedgerConfig
from .logging_config import get_logger, log_action


class Ledger:
    """
    Registry of accounts for one bank

    Not thread-safe: each account mutation (balance update plus history
    append) and each registration would need to run as one critical section
    before sharing a ledger between threads.
    """

    def __init__(
        self,
        name: str = "ABC Bank",
        currency: Currency = Currency.USD,
        savings_defaults: Optional[dict] = None,
        current_defaults: Optional[dict] = None,
        allow_duplicate_account_numbers: bool = False
    ):
        self.name = name
        self.currency = currency
        self.allow_duplicate_account_numbers = allow_duplicate_account_numbers
        self._policy_defaults = {
            AccountVariant.SAVINGS: dict(savings_defaults or {}),
            AccountVariant.CURRENT: dict(current_defaults or {}),
        }
        self._accounts: List[Account] = []
        self._index: Dict[str, Account] = {}
        self.logger = get_logger("banking_ledger.ledger")

    @classmethod
    def from_config(cls, config: LedgerConfig) -> 'Ledger':
        """Build a ledger using configured bank name and policy defaults"""
        return cls(
            name=config.bank_name,
            currency=Currency[config.currency.upper()],
            savings_defaults=config.savings_policy_options(),
            current_defaults=config.current_policy_options(),
            allow_duplicate_account_numbers=config.allow_duplicate_account_numbers
        )

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(list(self._accounts))

    def __contains__(self, account_number: object) -> bool:
        return account_number in self._index

    def create_account(
        self,
        variant: Union[AccountVariant, str],
        account_number: str,
        holder_name: str,
        initial_balance: AmountLike = Decimal('0'),
        **policy_overrides
    ) -> OperationResult:
        """
        Open and register a new account

        Args:
            variant: AccountVariant or its tag ("Savings" / "Current")
            account_number: Identifier used for lookup
            holder_name: Account holder
            initial_balance: Opening balance; recorded as an Initial Deposit when positive
            **policy_overrides: Per-account policy fields, e.g. minimum_balance

        Returns:
            OperationResult with the new account, or INVALID_AMOUNT /
            DUPLICATE_ACCOUNT

        Raises:
            ValueError: If the variant or a policy override is not recognised
        """
        if not isinstance(variant, AccountVariant):
            variant = AccountVariant(variant)
        if not account_number:
            raise ValueError("Account number is required")

        if account_number in self._index and not self.allow_duplicate_account_numbers:
            message = f"Account {account_number} already exists!"
            log_action(
                self.logger, "warning", message,
                account_number=account_number, action="create_account",
                extra={"reason": FailureReason.DUPLICATE_ACCOUNT.value}
            )
            return OperationResult.fail(
                FailureReason.DUPLICATE_ACCOUNT, message, account=self._index[account_number]
            )

        options = dict(self._policy_defaults[variant])
        options.update(policy_overrides)
        policy = default_policy(variant, **options)

        try:
            account = Account.open(
                variant, account_number, holder_name, initial_balance,
                policy=policy, currency=self.currency
            )
        except ValueError as e:
            log_action(
                self.logger, "warning", f"Account creation rejected: {e}",
                account_number=account_number, action="create_account",
                amount=str(initial_balance),
                extra={"reason": FailureReason.INVALID_AMOUNT.value}
            )
            return OperationResult.fail(FailureReason.INVALID_AMOUNT, "Invalid initial deposit amount!")

        self._accounts.append(account)
        if account_number in self._index:
            log_action(
                self.logger, "warning", "Duplicate account number registered; lookups return the first registration",
                account_number=account_number, action="create_account"
            )
        else:
            self._index[account_number] = account

        message = f"{variant.value} account created successfully!"
        log_action(
            self.logger, "info", message,
            account_number=account_number, action="create_account",
            amount=str(account.balance), extra={"variant": variant.value}
        )
        return OperationResult.ok(
            message, balance=account.balance, account=account,
            transactions=account.list_history()
        )

    def create_savings_account(self, account_number: str, holder_name: str,
                               initial_balance: AmountLike = Decimal('0'),
                               **policy_overrides) -> OperationResult:
        """Open a savings account"""
        return self.create_account(
            AccountVariant.SAVINGS, account_number, holder_name, initial_balance, **policy_overrides
        )

    def create_current_account(self, account_number: str, holder_name: str,
                               initial_balance: AmountLike = Decimal('0'),
                               **policy_overrides) -> OperationResult:
        """Open a current account"""
        return self.create_account(
            AccountVariant.CURRENT, account_number, holder_name, initial_balance, **policy_overrides
        )

    def find_account(self, account_number: str) -> Optional[Account]:
        """Get account by number, or None when it is not registered"""
        return self._index.get(account_number)

    def list_all(self) -> List[AccountSummary]:
        """Summaries of all accounts in the order they were opened"""
        return [account.to_summary() for account in self._accounts]

    def format_all(self) -> str:
        header = f"=== All Accounts in {self.name} ==="
        if not self._accounts:
            return f"{header}\nNo accounts found."
        return "\n".join([header] + [summary.display() for summary in self.list_all()])

    def apply_interest_to_all(self, period: Optional[str] = None) -> List[OperationResult]:
        """
        Apply one month of interest to every interest-bearing account

        Accounts that do not support interest are skipped and left untouched.
        """
        results = []
        for account in self._accounts:
            if not account.supports_interest:
                continue
            results.append(account.apply_interest(period=period))

        applied = [r for r in results if r.success]
        total = sum((r.amount for r in applied), Decimal('0'))
        log_action(
            self.logger, "info", "Monthly interest batch completed",
            action="apply_interest_to_all", amount=str(total),
            extra={"accounts": len(results), "applied": len(applied), "period": period}
        )
        return results

    def _not_found(self, account_number: str, action: str) -> OperationResult:
        log_action(
            self.logger, "warning", "Account not found",
            account_number=account_number, action=action,
            extra={"reason": FailureReason.ACCOUNT_NOT_FOUND.value}
        )
        return OperationResult.fail(FailureReason.ACCOUNT_NOT_FOUND, "Account not found!")

    def deposit(self, account_number: str, amount: AmountLike) -> OperationResult:
        account = self.find_account(account_number)
        if account is None:
            return self._not_found(account_number, "deposit")
        return account.deposit(amount)

    def withdraw(self, account_number: str, amount: AmountLike) -> OperationResult:
        account = self.find_account(account_number)
        if account is None:
            return self._not_found(account_number, "withdraw")
        return account.withdraw(amount)

    def get_balance(self, account_number: str) -> OperationResult:
        account = self.find_account(account_number)
        if account is None:
            return self._not_found(account_number, "get_balance")
        return OperationResult.ok(
            f"Current balance: {format_money(account.balance, account.currency)}",
            balance=account.balance, account=account
        )

    def describe(self, account_number: str) -> OperationResult:
        account = self.find_account(account_number)
        if account is None:
            return self._not_found(account_number, "describe")
        return OperationResult.ok(account.describe(), balance=account.balance, account=account)

    def history(self, account_number: str) -> OperationResult:
        account = self.find_account(account_number)
        if account is None:
            return self._not_found(account_number, "history")
        return OperationResult.ok(
            account.format_history(), balance=account.balance, account=account,
            transactions=account.list_history()
        )

