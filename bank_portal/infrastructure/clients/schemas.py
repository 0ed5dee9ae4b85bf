"""Pydantic schemas for the account and payment service wire formats"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from bank_portal.domain.models import AccountSnapshot, PaymentRequest, Transaction, TransactionKind


class TransactionPayload(BaseModel):
    """Single history entry in an account response"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    date: str
    description: str = ""
    amount: Decimal
    type: Literal["credit", "debit"]

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)


class AccountResponse(BaseModel):
    """Response for GET /api/accounts/by-account-number/{accountNumber}"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    accountNumber: str
    accountHolderName: str
    balance: Decimal
    transactions: List[TransactionPayload] = Field(default_factory=list)

    @field_validator("transactions", mode="before")
    @classmethod
    def missing_transactions_are_empty(cls, value):
        return [] if value is None else value

    @field_serializer("balance")
    def serialize_balance(self, balance: Decimal) -> float:
        return float(balance)

    def to_snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            account_id=self.accountNumber,
            holder_name=self.accountHolderName,
            balance=self.balance,
            transactions=tuple(
                Transaction(
                    id=txn.id,
                    date=txn.date,
                    description=txn.description,
                    amount=txn.amount,
                    kind=TransactionKind(txn.type),
                )
                for txn in self.transactions
            ),
        )


class PaymentInitiateRequest(BaseModel):
    """Request body for POST /api/payments/initiate"""

    senderAccountId: str = Field(..., min_length=1)
    receiverAccountId: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    currency: str = Field(..., min_length=1)
    idempotencyKey: str = Field(..., min_length=1)

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> float:
        # JSON number on the wire, not pydantic's default string form
        return float(amount)

    @classmethod
    def from_request(cls, request: PaymentRequest) -> "PaymentInitiateRequest":
        return cls(
            senderAccountId=request.sender_account_id,
            receiverAccountId=request.recipient_account_id,
            amount=request.amount,
            currency=request.currency,
            idempotencyKey=request.idempotency_key,
        )


class MessageResponse(BaseModel):
    """Success or error body carrying a human-readable message"""

    message: Optional[str] = None
