#!/usr/bin/env python3
"""
Banking Ledger Entry Point

Loads configuration, sets up logging and starts the interactive menu.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from banking_ledger.config import get_config
from banking_ledger.ledger import Ledger
from banking_ledger.logging_config import setup_logging
from banking_ledger.shell import BankingShell


def main() -> int:
    config = get_config()
    setup_logging(level=config.log_level, log_format=config.log_format)
    shell = BankingShell(Ledger.from_config(config))
    try:
        shell.run()
    except KeyboardInterrupt:
        print("\nShutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
