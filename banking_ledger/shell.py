"""
Interactive Banking Shell

Numbered text menu over a Ledger. The shell only reads input, parses amounts
and prints the messages carried by each OperationResult; all business rules
live in the ledger and accounts.
"""

from decimal import Decimal
from typing import Callable, Dict, Optional

from .currency import decimal_from_string
from .ledger import Ledger
from .accounts import AccountVariant
from .results import OperationResult
from .logging_config import get_logger


MENU_OPTIONS = [
    "Create Savings Account",
    "Create Current Account",
    "Deposit Money",
    "Withdraw Money",
    "Check Account Balance",
    "View Account Details",
    "View Transaction History",
    "View All Accounts",
    "Apply Interest to Savings Accounts",
    "Exit",
]

EXIT_CHOICE = str(len(MENU_OPTIONS))


class BankingShell:
    """Menu-driven interface to a ledger"""

    def __init__(
        self,
        ledger: Ledger,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print
    ):
        self.ledger = ledger
        self._input = input_func
        self._output = output
        self.logger = get_logger("banking_ledger.shell")

        self._handlers: Dict[str, Callable[[], None]] = {
            "1": lambda: self._create_account(AccountVariant.SAVINGS),
            "2": lambda: self._create_account(AccountVariant.CURRENT),
            "3": self._deposit,
            "4": self._withdraw,
            "5": lambda: self._account_command(self.ledger.get_balance),
            "6": lambda: self._account_command(self.ledger.describe),
            "7": lambda: self._account_command(self.ledger.history),
            "8": lambda: self._output(self.ledger.format_all()),
            "9": self._apply_interest,
        }

    def menu_text(self) -> str:
        lines = [f"========== {self.ledger.name} Banking System =========="]
        lines.extend(f"{number}. {label}" for number, label in enumerate(MENU_OPTIONS, start=1))
        return "\n".join(lines)

    def run(self) -> None:
        """Run the menu loop until Exit is chosen or input ends"""
        self._output("Welcome to the Banking System!")
        while True:
            self._output("")
            self._output(self.menu_text())
            try:
                choice = self._input("Enter your choice: ").strip()
            except EOFError:
                break

            if choice == EXIT_CHOICE:
                break

            handler = self._handlers.get(choice)
            if handler is None:
                self._output("Invalid choice! Please try again.")
                continue

            try:
                handler()
            except EOFError:
                break

        self._output(f"Thank you for using {self.ledger.name} Banking System!")

    def _prompt(self, text: str) -> str:
        return self._input(text).strip()

    def _prompt_amount(self, text: str) -> Optional[Decimal]:
        raw = self._prompt(text)
        try:
            return decimal_from_string(raw)
        except ValueError:
            self.logger.debug(f"Unparseable amount entered: {raw!r}")
            self._output("Invalid amount!")
            return None

    def _report(self, result: OperationResult) -> None:
        self._output(result.message)

    def _create_account(self, variant: AccountVariant) -> None:
        account_number = self._prompt("Enter account number: ")
        if not account_number:
            self._output("Account number is required.")
            return
        holder_name = self._prompt("Enter account holder name: ")
        raw_amount = self._prompt("Enter initial deposit (0 for no deposit): ")
        try:
            initial_balance = decimal_from_string(raw_amount) if raw_amount else Decimal('0')
        except ValueError:
            self._output("Invalid amount!")
            return
        self._report(self.ledger.create_account(variant, account_number, holder_name, initial_balance))

    def _deposit(self) -> None:
        account_number = self._prompt("Enter account number: ")
        if self.ledger.find_account(account_number) is None:
            self._output("Account not found!")
            return
        amount = self._prompt_amount("Enter deposit amount: ")
        if amount is not None:
            self._report(self.ledger.deposit(account_number, amount))

    def _withdraw(self) -> None:
        account_number = self._prompt("Enter account number: ")
        if self.ledger.find_account(account_number) is None:
            self._output("Account not found!")
            return
        amount = self._prompt_amount("Enter withdrawal amount: ")
        if amount is not None:
            self._report(self.ledger.withdraw(account_number, amount))

    def _account_command(self, command: Callable[[str], OperationResult]) -> None:
        account_number = self._prompt("Enter account number: ")
        self._report(command(account_number))

    def _apply_interest(self) -> None:
        self._output("=== Applying Monthly Interest ===")
        for result in self.ledger.apply_interest_to_all():
            self._output(f"Account {result.account_number}: {result.message}")
