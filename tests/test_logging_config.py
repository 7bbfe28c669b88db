"""
Test suite for structured logging

Tests the JSON and text formatters and that ledger operations emit
structured records.
"""

import json
import logging
from decimal import Decimal

import pytest

from banking_ledger.accounts import Account
from banking_ledger.logging_config import (
    JSONFormatter, TextFormatter, setup_logging, get_logger, log_action
)


class ListHandler(logging.Handler):
    """Collects records for inspection"""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    logger = get_logger("banking_ledger")
    handler = ListHandler()
    old_level, old_propagate = logger.level, logger.propagate
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(old_level)
    logger.propagate = old_propagate


def make_record(**fields):
    record = logging.LogRecord("banking_ledger.test", logging.INFO, __file__, 1, "hello", (), None)
    for name, value in fields.items():
        setattr(record, name, value)
    return record


class TestFormatters:
    """Test log formatters"""

    def test_json_formatter(self):
        record = make_record(account_number="SAV001", action="deposit", amount="10")
        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "hello"
        assert entry["account_number"] == "SAV001"
        assert entry["action"] == "deposit"
        assert entry["amount"] == "10"
        assert "extra" not in entry

    def test_text_formatter(self):
        line = TextFormatter().format(make_record(action="withdraw"))
        assert "INFO banking_ledger.test: hello" in line
        assert line.endswith("[action=withdraw]")


class TestSetupLogging:
    """Test logger setup"""

    def test_setup_replaces_handlers(self):
        logger = setup_logging("DEBUG", logger_name="banking_ledger.setup_test")
        logger = setup_logging("ERROR", logger_name="banking_ledger.setup_test", log_format="text")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)
        assert logger.level == logging.ERROR
        assert logger.propagate is False

    def test_log_action_respects_level(self):
        logger = logging.getLogger("banking_ledger.level_test")
        handler = ListHandler()
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

        log_action(logger, "info", "skipped", action="noop")
        log_action(logger, "warning", "kept", account_number="X", extra={"k": "v"})

        assert [r.getMessage() for r in handler.records] == ["kept"]
        assert handler.records[0].account_number == "X"
        assert handler.records[0].extra == {"k": "v"}
        logger.removeHandler(handler)


class TestOperationLogging:
    """Test that account operations log structured records"""

    def test_deposit_logged(self, captured):
        account = Account.open_savings("SAV001", "Alice", Decimal('500'))
        account.deposit(Decimal('25'))

        record = captured.records[-1]
        assert record.levelname == "INFO"
        assert record.account_number == "SAV001"
        assert record.action == "deposit"
        assert record.amount == "25"

    def test_rejection_logged_as_warning(self, captured):
        account = Account.open_savings("SAV002", "Alice", Decimal('500'))
        account.withdraw(Decimal('450'))

        record = captured.records[-1]
        assert record.levelname == "WARNING"
        assert record.action == "withdraw"
        assert record.extra == {"reason": "limit_exceeded"}
