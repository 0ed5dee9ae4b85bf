"""Session controller - the only owner and mutator of the client Session"""

import logging
import time

from bank_portal.domain.exceptions import (
    DomainException,
    GatewayError,
    InvalidTransitionError,
    SessionBusyError,
)
from bank_portal.domain.models import SubmissionResult
from bank_portal.domain.session import Screen, Session
from bank_portal.infrastructure.clients.accounts import AccountGateway
from bank_portal.infrastructure.observability.logging import log_login, log_payment
from bank_portal.infrastructure.observability.metrics import (
    payment_outcome,
    record_login,
    record_payment,
)
from bank_portal.services.payments import PaymentSubmitter

logger = logging.getLogger(__name__)


def success_message(result: SubmissionResult) -> str:
    """Banner text for an accepted payment; never reads as a failure"""
    if result.refresh_error is None:
        return result.confirmation
    return f"{result.confirmation} Balance could not be refreshed: {result.refresh_error}"


class SessionController:
    """
    Drives screen transitions and the login and payment operations.

    Login, logout and payment submission are refused with SessionBusyError
    while an operation is in flight. Moving between Dashboard and Payment is
    always allowed. Operation failures never raise; they end up in
    `session.status_message`.
    """

    def __init__(
        self,
        account_gateway: AccountGateway,
        submitter: PaymentSubmitter,
        session: Session | None = None,
    ):
        self.account_gateway = account_gateway
        self.submitter = submitter
        self.session = session or Session()

    def _ensure_idle(self, action: str) -> None:
        if self.session.busy:
            raise SessionBusyError(f"Cannot {action} while another operation is in progress")

    async def login(self, account_id: str) -> None:
        """LoggedOut -> Dashboard on success; stays LoggedOut with a message on failure"""
        self._ensure_idle("log in")
        if self.session.screen is not Screen.LOGGED_OUT:
            raise InvalidTransitionError("Already logged in")

        session = self.session
        session.form.account_number = account_id
        session.begin()
        start_time = time.time()

        try:
            snapshot = await self.account_gateway.fetch_account(account_id)
        except DomainException as e:
            session.finish(f"Login failed: {e}.")
            record_login(False)
            log_login(account_id, False, (time.time() - start_time) * 1000, error=str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error during login")
            session.finish("Login failed: Unexpected error.")
            record_login(False)
            log_login(account_id, False, (time.time() - start_time) * 1000, error=str(e))
            return

        session.enter_dashboard(snapshot)
        session.finish()
        record_login(True)
        log_login(snapshot.account_id, True, (time.time() - start_time) * 1000)

    def navigate_to_payment(self) -> None:
        self.session.show_payment()

    def navigate_back(self) -> None:
        """Payment -> Dashboard; an in-flight payment keeps running"""
        self.session.show_dashboard()

    def logout(self) -> None:
        self._ensure_idle("log out")
        if self.session.screen is Screen.LOGGED_OUT:
            raise InvalidTransitionError("Not logged in")
        account_id = self.session.account.account_id if self.session.logged_in else None
        self.session.reset()
        logger.info("Logged out", extra={"account_id": account_id})

    async def submit_payment(self, recipient_id: str, amount_text: str) -> None:
        """
        Submit a payment from the Payment screen.

        The screen does not change. On success the refreshed snapshot replaces
        the stored one and the payment form is cleared; on any failure the
        snapshot is left untouched.
        """
        self._ensure_idle("submit a payment")
        if self.session.screen is not Screen.PAYMENT:
            raise InvalidTransitionError("Payments can only be submitted from the payment screen")

        session = self.session
        session.form.recipient_id = recipient_id
        session.form.amount = amount_text
        sender = session.account
        sender_id = sender.account_id if sender else None
        session.begin()
        start_time = time.time()

        try:
            result = await self.submitter.submit(sender, recipient_id, amount_text)
        except GatewayError as e:
            session.finish(f"Payment failed: {e}")
            self._record_payment(sender_id, payment_outcome(None), start_time, error=str(e))
            return
        except DomainException as e:
            # validation and missing sender: rejected before any request
            session.finish(str(e))
            self._record_payment(sender_id, payment_outcome(None, rejected=True), start_time, error=str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error during payment")
            session.finish("Payment failed: Unexpected error.")
            self._record_payment(sender_id, payment_outcome(None), start_time, error=str(e))
            return

        if result.snapshot is not None:
            session.replace_account(result.snapshot)
        session.form.clear_payment()
        session.finish(success_message(result))
        self._record_payment(
            sender_id,
            payment_outcome(result),
            start_time,
            idempotency_key=result.request.idempotency_key,
            error=str(result.refresh_error) if result.refresh_error else None,
        )

    def _record_payment(
        self,
        sender_id: str | None,
        outcome: str,
        start_time: float,
        idempotency_key: str | None = None,
        error: str | None = None,
    ) -> None:
        record_payment(outcome)
        log_payment(sender_id, outcome, (time.time() - start_time) * 1000, idempotency_key, error)
