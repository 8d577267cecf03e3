"""
CLI interface for the ATM system.

This module provides the interactive menus that drive the bank: a main menu
for creating and selecting accounts and an account menu for deposits,
withdrawals, balance and history.
"""

import click
import logging
import sys
from decimal import Decimal, InvalidOperation, Overflow, getcontext
from enum import Enum
from typing import Optional, TextIO

from .bank import Bank, MAX_ACCOUNT_NUMBER, MAX_INTEREST_RATE, MIN_ACCOUNT_NUMBER
from .models import Account, format_currency

logger = logging.getLogger(__name__)

MAIN_MENU = (
    "ATM Main Menu:",
    "1. Create Account",
    "2. Select Account",
    "3. Exit",
)

ACCOUNT_MENU = (
    "Account Menu:",
    "1. Check Balance",
    "2. Deposit",
    "3. Withdraw",
    "4. Display Transactions",
    "5. Exit Account",
)


class MenuState(Enum):
    """States of the menu loop."""
    MAIN = "main"
    ACCOUNT = "account"
    CLOSED = "closed"


class Console:
    """Line-oriented terminal: one line in, one line out."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin

    def read_line(self) -> Optional[str]:
        """Read the next line, or None at end of input."""
        line = self.stream.readline()
        if not line:
            return None
        return line.rstrip('\r\n')

    def write_line(self, text: str = "") -> None:
        click.echo(text)


def is_valid_name(name: str) -> bool:
    """A holder name is non-empty and made only of letters and whitespace."""
    if not name:
        return False
    return all(char.isalpha() or char.isspace() for char in name)


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse an integer, returning None when the text is not one."""
    if text is None:
        return None
    text = text.strip()
    # int() also takes digit separators and non-ASCII digits
    if '_' in text or not text.isascii():
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_currency(amount_str: str) -> Decimal:
    """Parse currency input."""
    try:
        # Remove $ and commas
        clean_str = amount_str.replace('$', '').replace(',', '').strip()
        amount = Decimal(clean_str)
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {amount_str}")

    if not amount.is_finite() or amount.adjusted() > getcontext().Emax:
        raise ValueError(f"Invalid amount: {amount_str}")
    return amount


class EndOfInput(Exception):
    """Raised when the console runs out of lines mid-dialog."""


class AtmApplication:
    """Menu state machine on top of a Bank and a Console."""

    def __init__(self, bank: Bank, console: Console):
        self.bank = bank
        self.console = console
        self.state = MenuState.MAIN
        self.account: Optional[Account] = None

    def echo(self, text: str = "") -> None:
        self.console.write_line(text)

    def prompt(self, text: str) -> str:
        """Show a prompt and return the reply."""
        self.echo(text)
        line = self.console.read_line()
        if line is None:
            raise EndOfInput()
        return line

    def read_choice(self, menu) -> Optional[int]:
        """Display a menu and read a numeric choice; None if unparseable."""
        for line in menu:
            self.echo(line)
        line = self.console.read_line()
        if line is None:
            raise EndOfInput()
        choice = parse_int(line)
        if choice is None:
            self.echo("Invalid input. Please enter a number.")
        return choice

    def run(self) -> None:
        """Run menus until the operator exits or input ends."""
        while self.state is not MenuState.CLOSED:
            try:
                self.step()
            except EndOfInput:
                logger.debug("End of input, closing session")
                self.close()

    def step(self) -> None:
        """Handle one menu choice in the current state."""
        if self.state is MenuState.MAIN:
            self.handle_main_menu()
        elif self.state is MenuState.ACCOUNT:
            self.handle_account_menu()

    def close(self) -> None:
        self.account = None
        self.state = MenuState.CLOSED

    def handle_main_menu(self) -> None:
        choice = self.read_choice(MAIN_MENU)
        if choice is None:
            return

        if choice == 1:
            self.create_account()
        elif choice == 2:
            self.select_account()
        elif choice == 3:
            self.close()
        else:
            self.echo("Invalid option. Try again.")

    def create_account(self) -> None:
        """Collect and validate new account details, then open it."""
        holder_name = self.prompt("Enter Account Holder Name:")
        if not is_valid_name(holder_name):
            self.echo("Invalid name. Please enter a valid name.")
            return

        account_number = parse_int(self.prompt("Enter Account Number (100-1000):"))
        if account_number is None:
            self.echo("Invalid input. Please enter a valid account number.")
            return
        if not self.bank.is_account_number_unique(account_number):
            self.echo("Account number already exists.")
            return
        if not MIN_ACCOUNT_NUMBER <= account_number <= MAX_ACCOUNT_NUMBER:
            self.echo("Account number must be between 100 and 1000.")
            return

        try:
            initial_balance = parse_currency(self.prompt("Enter Initial Balance:"))
        except ValueError:
            initial_balance = None
        if initial_balance is None or initial_balance < 0:
            self.echo("Invalid input. Please enter a valid balance.")
            return

        try:
            interest_rate = parse_currency(self.prompt("Enter Annual Interest Rate (max 3%):"))
        except ValueError:
            interest_rate = None
        if interest_rate is None or interest_rate > MAX_INTEREST_RATE:
            self.echo("Invalid input. Interest rate must be less than or equal to 3%.")
            return

        try:
            self.bank.open_account(holder_name, account_number, initial_balance, interest_rate)
        except ValueError as e:
            self.echo(str(e))
            return
        self.echo("Account created successfully!")

    def select_account(self) -> None:
        account_number = parse_int(self.prompt("Enter Account Number:"))
        if account_number is None:
            self.echo("Invalid input. Please enter a valid account number.")
            return

        account = self.bank.get_account(account_number)
        if account is None:
            self.echo("Account not found.")
            return

        self.echo(f"Welcome, {account.holder_name}")
        self.account = account
        self.state = MenuState.ACCOUNT
        logger.debug(f"Selected account {account_number}")

    def handle_account_menu(self) -> None:
        choice = self.read_choice(ACCOUNT_MENU)
        if choice is None:
            return

        account = self.account
        if choice == 1:
            self.echo(f"Current Balance: {format_currency(account.balance)}")
        elif choice == 2:
            amount = self.read_amount("Enter amount to deposit:")
            if amount is not None:
                try:
                    account.deposit(amount)
                except Overflow:
                    # Balance would exceed the decimal context; nothing was recorded
                    logger.warning(f"Account {account.account_number}: deposit of {amount} overflows balance")
                    self.echo("Invalid input. Please enter a valid amount.")
                else:
                    self.echo("Deposit successful.")
        elif choice == 3:
            amount = self.read_amount("Enter amount to withdraw:")
            if amount is not None:
                try:
                    account.withdraw(amount)
                except ValueError as e:
                    self.echo(str(e))
                else:
                    self.echo("Withdrawal successful.")
        elif choice == 4:
            self.echo("Transaction History:")
            for entry in account.display_transactions():
                self.echo(entry)
        elif choice == 5:
            logger.debug(f"Leaving account {account.account_number}")
            self.account = None
            self.state = MenuState.MAIN
        else:
            self.echo("Invalid option. Try again.")

    def read_amount(self, text: str) -> Optional[Decimal]:
        """Prompt for a non-negative amount; None after reporting bad input."""
        try:
            amount = parse_currency(self.prompt(text))
        except ValueError:
            amount = None
        if amount is None or amount < 0:
            self.echo("Invalid input. Please enter a valid amount.")
            return None
        return amount


@click.command()
@click.option('--log-level', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level for diagnostics written to stderr')
@click.option('--seed/--no-seed', default=True,
              help='Create the default accounts 100-109 at startup')
def cli(log_level, seed):
    """ATM Simulation CLI"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )
    AtmApplication(Bank(seed=seed), Console()).run()


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
