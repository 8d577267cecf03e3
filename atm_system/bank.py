"""
Bank for the ATM system.

This module contains the business rules for opening and looking up accounts.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterator, Optional

from .models import Account

MIN_ACCOUNT_NUMBER = 100
MAX_ACCOUNT_NUMBER = 1000
MAX_INTEREST_RATE = Decimal('3.0')

DEFAULT_ACCOUNT_COUNT = 10
DEFAULT_BALANCE = Decimal('100.0')
DEFAULT_HOLDER_NAME = "Default User"


class Bank:
    """Owns every account of the session and enforces the opening rules."""

    def __init__(self, seed: bool = True):
        """Initialize the bank, optionally with the default accounts."""
        self.accounts: Dict[int, Account] = {}
        self.logger = logging.getLogger(__name__)
        if seed:
            self.initialize()

    def __len__(self) -> int:
        return len(self.accounts)

    def __contains__(self, account_number: int) -> bool:
        return account_number in self.accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts.values())

    def initialize(self) -> None:
        """Seed the default demo accounts 100-109."""
        for offset in range(DEFAULT_ACCOUNT_COUNT):
            account_number = MIN_ACCOUNT_NUMBER + offset
            if account_number in self.accounts:
                continue
            # Seeded accounts skip open_account's validation
            self.accounts[account_number] = Account(
                account_number=account_number,
                balance=DEFAULT_BALANCE,
                annual_interest_rate=MAX_INTEREST_RATE,
                holder_name=DEFAULT_HOLDER_NAME
            )
        self.logger.info(f"Bank initialized with {len(self.accounts)} accounts")

    def get_account(self, account_number: int) -> Optional[Account]:
        """Get account by account number."""
        return self.accounts.get(account_number)

    def is_account_number_unique(self, account_number: int) -> bool:
        """Check that no existing account uses this number."""
        return account_number not in self.accounts

    def open_account(self, holder_name: str, account_number: int,
                     initial_balance: Decimal,
                     annual_interest_rate: Decimal) -> Account:
        """
        Open a new account.

        Checks are made in a fixed order: number range, interest rate ceiling,
        then uniqueness. The first failing check decides the error message.

        Args:
            holder_name: Name of the account holder
            account_number: Requested account number
            initial_balance: Opening balance
            annual_interest_rate: Annual interest rate as percentage

        Returns:
            The newly stored Account

        Raises:
            ValueError: If any rule is violated; the bank is left unchanged.
        """
        if not isinstance(annual_interest_rate, Decimal):
            annual_interest_rate = Decimal(str(annual_interest_rate))

        try:
            if account_number < MIN_ACCOUNT_NUMBER or account_number > MAX_ACCOUNT_NUMBER:
                raise ValueError(
                    f"Account number must be between {MIN_ACCOUNT_NUMBER} and {MAX_ACCOUNT_NUMBER}."
                )

            if annual_interest_rate > MAX_INTEREST_RATE:
                raise ValueError("Interest rate must be less than or equal to 3%.")

            if not self.is_account_number_unique(account_number):
                raise ValueError("Account number already exists.")
        except ValueError as e:
            self.logger.warning(f"Rejected account {account_number} for {holder_name!r}: {e}")
            raise

        account = Account(
            account_number=account_number,
            balance=initial_balance,
            annual_interest_rate=annual_interest_rate,
            holder_name=holder_name
        )
        self.accounts[account_number] = account
        self.logger.info(f"Opened account {account_number} for {holder_name!r}")
        return account
