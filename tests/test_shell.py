"""
Test suite for the interactive shell

Drives the numbered menu with scripted input and checks the printed output.
"""

from decimal import Decimal

from banking_ledger.ledger import Ledger
from banking_ledger.shell import BankingShell, MENU_OPTIONS


def run_shell(ledger, answers):
    """Run the shell over scripted answers, returning printed lines"""
    answers = iter(answers)
    printed = []

    def fake_input(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    shell = BankingShell(ledger, input_func=fake_input, output=printed.append)
    shell.run()
    return printed


class TestBankingShell:
    """Test menu dispatch"""

    def setup_method(self):
        """Set up test fixtures"""
        self.ledger = Ledger("ABC Bank")

    def test_menu_text(self):
        text = BankingShell(self.ledger).menu_text()
        lines = text.splitlines()

        assert lines[0] == "========== ABC Bank Banking System =========="
        assert lines[1] == "1. Create Savings Account"
        assert lines[-1] == "10. Exit"
        assert len(lines) == len(MENU_OPTIONS) + 1

    def test_exit(self):
        printed = run_shell(self.ledger, ["10"])

        assert printed[0] == "Welcome to the Banking System!"
        assert printed[-1] == "Thank you for using ABC Bank Banking System!"

    def test_end_of_input_exits(self):
        printed = run_shell(self.ledger, [])
        assert printed[-1] == "Thank you for using ABC Bank Banking System!"

    def test_invalid_choice(self):
        printed = run_shell(self.ledger, ["42", "10"])
        assert "Invalid choice! Please try again." in printed

    def test_create_deposit_and_withdraw(self):
        printed = run_shell(self.ledger, [
            "1", "SAV001", "Alice Smith", "500",
            "3", "SAV001", "$1,000.00",
            "4", "SAV001", "1450",
            "4", "SAV001", "200",
            "10",
        ])

        assert "Savings account created successfully!" in printed
        assert "Deposited $1,000.00. New balance: $1,500.00" in printed
        assert "Withdrawal failed! Minimum balance of $100.00 must be maintained." in printed
        assert "Withdrew $200.00. New balance: $1,300.00" in printed

        account = self.ledger.find_account("SAV001")
        assert account.holder_name == "Alice Smith"
        assert account.balance == Decimal('1300.00')

    def test_current_account_overdraft(self):
        printed = run_shell(self.ledger, [
            "2", "CUR001", "Bob", "",
            "4", "CUR001", "100",
            "6", "CUR001",
            "10",
        ])

        assert "Current account created successfully!" in printed
        assert "Overdraft fee of $25.00 applied.\nWithdrew $100.00. New balance: -$125.00" in printed
        details = [line for line in printed if line.startswith("=== Current Account Information")]
        assert details and details[0].endswith("*** ACCOUNT OVERDRAWN ***")

    def test_account_not_found(self):
        printed = run_shell(self.ledger, ["3", "NOPE", "4", "NOPE", "5", "NOPE", "7", "NOPE", "10"])
        assert printed.count("Account not found!") == 4

    def test_invalid_amount(self):
        self.ledger.create_current_account("CUR001", "Bob", Decimal('10'))
        printed = run_shell(self.ledger, [
            "3", "CUR001", "lots",
            "3", "CUR001", "-5",
            "3", "CUR001", "1e3",
            "4", "CUR001", "12abc",
            "3", "CUR001", "10 dollars 5 cents",
            "10",
        ])

        assert printed.count("Invalid amount!") == 4
        assert "Invalid deposit amount!" in printed
        assert self.ledger.find_account("CUR001").balance == Decimal('10')

    def test_duplicate_account(self):
        printed = run_shell(self.ledger, [
            "1", "SAV001", "Alice", "0",
            "2", "SAV001", "Bob", "0",
            "10",
        ])
        assert "Account SAV001 already exists!" in printed

    def test_balance_history_and_listing(self):
        self.ledger.create_savings_account("SAV001", "Alice", Decimal('500'))
        printed = run_shell(self.ledger, ["5", "SAV001", "7", "SAV001", "8", "10"])

        assert "Current balance: $500.00" in printed
        assert any(line.startswith("=== Transaction History for SAV001 ===") for line in printed)
        assert ("=== All Accounts in ABC Bank ===\n"
                "Account: SAV001 | Holder: Alice | Type: Savings | Balance: $500.00") in printed

    def test_apply_interest(self):
        self.ledger.create_savings_account("SAV001", "Alice", Decimal('1200'))
        self.ledger.create_current_account("CUR001", "Bob", Decimal('1200'))
        printed = run_shell(self.ledger, ["9", "10"])

        assert "=== Applying Monthly Interest ===" in printed
        assert "Account SAV001: Interest of $4.00 applied. New balance: $1,204.00" in printed
        assert not any(line.startswith("Account CUR001:") for line in printed)
        assert self.ledger.find_account("CUR001").balance == Decimal('1200')
