"""
ATM Simulation

An in-memory ATM with a menu-driven CLI interface.
Supports account creation, deposits, withdrawals, balance inquiries and
transaction history.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

from .models import Account, format_currency
from .bank import Bank
from .cli import AtmApplication, Console, MenuState, main


def create_bank(seed: bool = True) -> Bank:
    """
    Create a Bank instance.

    Args:
        seed: Whether to create the default accounts 100-109

    Returns:
        Bank instance
    """
    return Bank(seed=seed)


__all__ = [
    "Account",
    "Bank",
    "AtmApplication",
    "Console",
    "MenuState",
    "format_currency",
    "create_bank",
    "main"
]
