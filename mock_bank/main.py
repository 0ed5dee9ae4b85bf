from datetime import date
from decimal import Decimal
from pathlib import Path
import itertools
import json
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bank_portal.infrastructure.clients.schemas import (
    AccountResponse,
    MessageResponse,
    PaymentInitiateRequest,
    TransactionPayload,
)

# Support both local development and Docker
DATA_DIR = Path("/bank_stub") if os.path.exists("/bank_stub") else Path(__file__).resolve().parent


def load_seed_accounts() -> list[dict]:
    return json.loads((DATA_DIR / "accounts.json").read_text())


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=MessageResponse(message=message).model_dump())


class MockBank:
    """In-memory accounts plus the responses of already processed payments"""

    def __init__(self, seed_accounts: list[dict]):
        self.accounts = {
            account.accountNumber: account
            for account in (AccountResponse.model_validate(raw) for raw in seed_accounts)
        }
        self.processed: dict[str, dict] = {}
        self._txn_ids = itertools.count(1)

    def _entry(self, description: str, amount: Decimal, kind: str) -> TransactionPayload:
        return TransactionPayload(
            id=f"TXN-{next(self._txn_ids):06d}",
            date=date.today().isoformat(),
            description=description,
            amount=amount,
            type=kind,
        )

    def transfer(self, sender: AccountResponse, receiver: AccountResponse, amount: Decimal) -> None:
        sender.balance -= amount
        receiver.balance += amount
        # histories are newest first
        sender.transactions.insert(0, self._entry(f"Payment to {receiver.accountNumber}", -amount, "debit"))
        receiver.transactions.insert(0, self._entry(f"Payment from {sender.accountNumber}", amount, "credit"))


def create_app(seed_accounts: list[dict] | None = None) -> FastAPI:
    app = FastAPI(title="Mock Bank Server", version="1.0.0")
    bank = MockBank(load_seed_accounts() if seed_accounts is None else seed_accounts)
    app.state.bank = bank

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return _message(400, "Invalid payment request")

    @app.get("/health")
    def health(): return {"status": "ok"}

    @app.get("/api/accounts/by-account-number/{account_number}")
    def get_account(account_number: str):
        account = bank.accounts.get(account_number)
        if account is None:
            return _message(404, f"Account not found: {account_number}")
        return JSONResponse(content=account.model_dump())

    @app.post("/api/payments/initiate")
    def initiate_payment(body: PaymentInitiateRequest):
        if body.idempotencyKey in bank.processed:
            return JSONResponse(content=bank.processed[body.idempotencyKey])

        sender = bank.accounts.get(body.senderAccountId)
        if sender is None:
            return _message(404, f"Sender account not found: {body.senderAccountId}")
        receiver = bank.accounts.get(body.receiverAccountId)
        if receiver is None:
            return _message(404, f"Receiver account not found: {body.receiverAccountId}")
        if sender is receiver:
            return _message(400, "Sender and receiver accounts must differ")
        if sender.balance < body.amount:
            return _message(400, "Insufficient funds")

        bank.transfer(sender, receiver, body.amount)
        content = MessageResponse(
            message=f"Payment of {body.amount:.2f} {body.currency} to {receiver.accountNumber} initiated successfully."
        ).model_dump()
        bank.processed[body.idempotencyKey] = content
        return JSONResponse(content=content)

    return app


app = create_app()
