"""
Data models for the ATM system.

This module contains the account structure used throughout the application.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

logger = logging.getLogger(__name__)


def format_currency(amount: Decimal) -> str:
    """Format an amount for display, e.g. ``$1,234.50``."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


@dataclass
class Account:
    """Represents a bank account held in memory for the lifetime of the session."""

    account_number: int
    balance: Decimal = Decimal('0.00')
    annual_interest_rate: Decimal = Decimal('0.00')  # Annual interest rate as percentage
    holder_name: str = ""
    transactions: List[str] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        """Normalize amounts and record the opening entry."""
        if not isinstance(self.balance, Decimal):
            self.balance = Decimal(str(self.balance))

        if not isinstance(self.annual_interest_rate, Decimal):
            self.annual_interest_rate = Decimal(str(self.annual_interest_rate))

        self.transactions.append(
            f"Account created with initial balance: {format_currency(self.balance)}"
        )

    def can_withdraw(self, amount: Decimal) -> bool:
        """Check if withdrawal is possible without going below zero."""
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))

        return amount <= self.balance

    def deposit(self, amount: Decimal) -> None:
        """Deposit money to account."""
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))

        self.balance += amount
        self.transactions.append(f"Deposited: {format_currency(amount)}")
        logger.debug(f"Account {self.account_number}: deposited {amount}, balance {self.balance}")

    def withdraw(self, amount: Decimal) -> None:
        """
        Withdraw money from account.

        Raises:
            ValueError: If the amount exceeds the current balance. The account
                is left untouched in that case.
        """
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))

        if not self.can_withdraw(amount):
            logger.warning(
                f"Account {self.account_number}: withdrawal of {amount} refused, balance {self.balance}"
            )
            raise ValueError("Insufficient funds.")

        self.balance -= amount
        self.transactions.append(f"Withdrew: {format_currency(amount)}")
        logger.debug(f"Account {self.account_number}: withdrew {amount}, balance {self.balance}")

    def display_transactions(self) -> List[str]:
        """Return the transaction history, oldest first."""
        return list(self.transactions)
