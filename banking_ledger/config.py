"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal
from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Banking ledger configuration"""

    # Bank identity
    bank_name: str = "ABC Bank"
    currency: str = "USD"

    # Savings account defaults
    savings_interest_rate: str = "0.04"  # Annual, as a fraction
    savings_minimum_balance: str = "100.00"

    # Current account defaults
    current_overdraft_limit: str = "1000.00"
    current_overdraft_fee: str = "25.00"

    # Registry rules
    allow_duplicate_account_numbers: bool = False

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text

    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False

    def savings_policy_options(self) -> dict:
        """Keyword options for a SavingsPolicy"""
        return {
            "interest_rate": Decimal(self.savings_interest_rate),
            "minimum_balance": Decimal(self.savings_minimum_balance),
        }

    def current_policy_options(self) -> dict:
        """Keyword options for a CurrentPolicy"""
        return {
            "overdraft_limit": Decimal(self.current_overdraft_limit),
            "overdraft_fee": Decimal(self.current_overdraft_fee),
        }


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
