"""
Console front end: bank-portal.

Usage:
    bank-portal
    bank-portal --account-api http://localhost:8080 --payment-api http://localhost:8081

Draws the active screen and feeds user choices to the SessionController.
No business logic lives here.
"""

import argparse
import asyncio
import sys

from bank_portal.config import settings
from bank_portal.controller import SessionController
from bank_portal.domain.amounts import format_money
from bank_portal.domain.exceptions import SessionStateError
from bank_portal.domain.models import AccountSnapshot, Transaction, TransactionKind
from bank_portal.domain.session import Screen, Session
from bank_portal.infrastructure.clients.accounts import AccountGateway
from bank_portal.infrastructure.clients.payments import PaymentClient
from bank_portal.infrastructure.observability.logging import setup_logging
from bank_portal.services.payments import PaymentSubmitter

RULE = "=" * 50


def format_transaction(txn: Transaction) -> str:
    """Debits are always shown negative, credits positive, whatever the amount's sign"""
    sign = "-" if txn.kind is TransactionKind.DEBIT else "+"
    return f"  {txn.date:<12} {txn.description:<24} {sign}{format_money(abs(txn.amount))}"


def _render_login() -> list[str]:
    return ["Welcome to Your Bank", "Log in with your account number (e.g. ACC-001-A)"]


def _render_dashboard(account: AccountSnapshot) -> list[str]:
    lines = [
        f"Welcome, {account.holder_name}!",
        f"Account: {account.account_id}",
        f"Balance: {format_money(account.balance)}",
        "",
        "Recent transactions:",
    ]
    if account.transactions:
        lines.extend(format_transaction(txn) for txn in account.transactions)
    else:
        lines.append("  No transactions yet.")
    return lines


def _render_payment(account: AccountSnapshot) -> list[str]:
    return [
        "Make a Payment",
        f"From: {account.account_id} (balance {format_money(account.balance)})",
    ]


def render(session: Session) -> str:
    """Draw the current screen, the busy indicator and the message banner"""
    lines = [RULE]
    if session.status_message:
        lines += [f"* {session.status_message}", RULE]
    if session.busy:
        lines += ["Processing...", RULE]

    if session.screen is Screen.LOGGED_OUT:
        lines += _render_login()
    elif session.screen is Screen.DASHBOARD:
        lines += _render_dashboard(session.account)
    elif session.screen is Screen.PAYMENT:
        lines += _render_payment(session.account)
    else:
        raise ValueError(f"Unknown screen: {session.screen}")

    lines.append(RULE)
    return "\n".join(lines)


async def _prompt(text: str) -> str:
    return (await asyncio.to_thread(input, text)).strip()


async def run(controller: SessionController) -> None:
    """Interactive loop until the user quits from the login screen"""
    session = controller.session
    while True:
        print(render(session))
        try:
            if session.screen is Screen.LOGGED_OUT:
                account_id = await _prompt("Account number (blank to quit): ")
                if not account_id:
                    return
                await controller.login(account_id)

            elif session.screen is Screen.DASHBOARD:
                choice = await _prompt("1) Make a payment  2) Logout\nChoice: ")
                if choice == "1":
                    controller.navigate_to_payment()
                elif choice == "2":
                    controller.logout()
                else:
                    print("Invalid choice. Try again.")

            elif session.screen is Screen.PAYMENT:
                choice = await _prompt("1) Confirm payment  2) Back to dashboard\nChoice: ")
                if choice == "1":
                    recipient = await _prompt("Recipient account ID (e.g. ACC-002-B): ")
                    amount = await _prompt("Amount (e.g. 100.00): ")
                    await controller.submit_payment(recipient, amount)
                elif choice == "2":
                    controller.navigate_back()
                else:
                    print("Invalid choice. Try again.")

        except SessionStateError as e:
            print(e)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="bank-portal", description="Banking demo console client")
    parser.add_argument("--account-api", default=settings.account_api_base, help="Account service base URL")
    parser.add_argument("--payment-api", default=settings.payment_api_base, help="Payment service base URL")
    parser.add_argument("--currency", default=settings.payment_currency, help="Payment currency code")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point of the CLI."""
    args = _parse_args(argv)
    setup_logging(args.log_level.upper())

    gateway = AccountGateway(base_url=args.account_api)
    submitter = PaymentSubmitter(PaymentClient(base_url=args.payment_api), gateway, currency=args.currency)
    controller = SessionController(gateway, submitter)

    try:
        asyncio.run(run(controller))
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")
        sys.exit(0)
    print("Thank you for banking with us. Goodbye!")


if __name__ == "__main__":  # pragma: no cover
    main()
