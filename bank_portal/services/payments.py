"""Payment submission workflow: validate, send, refresh the sender's snapshot"""

import logging
from typing import Callable

from bank_portal.config import settings
from bank_portal.domain.amounts import parse_amount
from bank_portal.domain.exceptions import GatewayError, MissingRecipient, NoSenderAccount
from bank_portal.domain.idempotency import generate_idempotency_key
from bank_portal.domain.models import AccountSnapshot, PaymentRequest, SubmissionResult
from bank_portal.infrastructure.clients.accounts import AccountGateway
from bank_portal.infrastructure.clients.payments import PaymentClient

logger = logging.getLogger(__name__)


class PaymentSubmitter:
    """Stateless submitter; the caller applies the returned snapshot"""

    def __init__(
        self,
        payment_client: PaymentClient,
        account_gateway: AccountGateway,
        currency: str | None = None,
        key_factory: Callable[[], str] = generate_idempotency_key,
    ):
        self.payment_client = payment_client
        self.account_gateway = account_gateway
        self.currency = currency or settings.payment_currency
        self.key_factory = key_factory

    def build_request(
        self,
        sender: AccountSnapshot | None,
        recipient_id: str,
        amount_text: str,
    ) -> PaymentRequest:
        """
        Validate inputs and build a payment attempt with a fresh idempotency key.

        Checks run in order and the first failure wins:
        1. amount parses as a decimal > 0 (InvalidAmount)
        2. sender has an account id (NoSenderAccount)
        3. recipient is not blank (MissingRecipient)
        """
        amount = parse_amount(amount_text)

        if sender is None or not (sender.account_id or "").strip():
            raise NoSenderAccount()

        recipient_id = (recipient_id or "").strip()
        if not recipient_id:
            raise MissingRecipient()

        return PaymentRequest(
            sender_account_id=sender.account_id,
            recipient_account_id=recipient_id,
            amount=amount,
            currency=self.currency,
            idempotency_key=self.key_factory(),
        )

    async def submit(
        self,
        sender: AccountSnapshot | None,
        recipient_id: str,
        amount_text: str,
    ) -> SubmissionResult:
        """
        Submit a payment, then refresh the sender's account.

        The refresh is issued only after the payment response is in. A refresh
        failure does not fail the submission; it is returned on the result.

        Raises:
            ValidationError, NoSenderAccount: Before any request is made
            GatewayError: If the payment service rejects or cannot be reached
        """
        request = self.build_request(sender, recipient_id, amount_text)
        confirmation = await self.payment_client.initiate(request)
        logger.info(
            "Payment accepted",
            extra={
                "idempotency_key": request.idempotency_key,
                "sender_account_id": request.sender_account_id,
                "recipient_account_id": request.recipient_account_id,
            },
        )

        result = SubmissionResult(request=request, confirmation=confirmation)
        try:
            result.snapshot = await self.account_gateway.fetch_account(request.sender_account_id)
        except GatewayError as e:
            logger.warning(
                f"Balance refresh failed after payment: {e}",
                extra={"idempotency_key": request.idempotency_key},
            )
            result.refresh_error = e
        return result
