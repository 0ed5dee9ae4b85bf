"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Tuple

from bank_portal.domain.exceptions import GatewayError


class TransactionKind(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


@dataclass(frozen=True)
class Transaction:
    """Entry in an account's history, as reported by the account service"""

    id: str
    date: str  # calendar date string, kept verbatim
    description: str
    amount: Decimal  # signed; not reconciled with kind
    kind: TransactionKind


@dataclass(frozen=True)
class AccountSnapshot:
    """Balance and history of one account at fetch time"""

    account_id: str
    holder_name: str
    balance: Decimal
    transactions: Tuple[Transaction, ...] = ()  # newest first


@dataclass(frozen=True)
class PaymentRequest:
    """Single payment attempt sent to the payment service"""

    sender_account_id: str
    recipient_account_id: str
    amount: Decimal
    currency: str
    idempotency_key: str


@dataclass
class SubmissionResult:
    """Outcome of an accepted payment, including the follow-up balance refresh"""

    request: PaymentRequest
    confirmation: str
    snapshot: AccountSnapshot | None = None
    refresh_error: GatewayError | None = field(default=None)

    @property
    def refreshed(self) -> bool:
        return self.snapshot is not None
