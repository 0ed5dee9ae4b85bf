"""Account service HTTP client for fetching account snapshots"""

import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PayloadError

from bank_portal.config import settings
from bank_portal.domain.exceptions import AccountNotFound, EmptyAccountId, GatewayError
from bank_portal.domain.models import AccountSnapshot
from bank_portal.infrastructure.clients.errors import error_from_response
from bank_portal.infrastructure.clients.schemas import AccountResponse
from bank_portal.infrastructure.observability.metrics import (
    gateway_failure_counter,
    gateway_latency_histogram,
)

logger = logging.getLogger(__name__)


class AccountGateway:
    """Client for the account service's account lookup endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.account_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def fetch_account(self, account_id: str) -> AccountSnapshot:
        """
        Fetch balance and transaction history for an account number.

        Issues exactly one request. A missing transaction list in the
        response becomes an empty history.

        Raises:
            EmptyAccountId: If account_id is blank (no request is made)
            AccountNotFound: On HTTP 404
            GatewayError: On other HTTP errors, timeouts, or invalid response
        """
        account_id = (account_id or "").strip()
        if not account_id:
            raise EmptyAccountId()

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with gateway_latency_histogram.labels(endpoint="account").time():
                    response = await client.get(
                        f"{self.base_url}/api/accounts/by-account-number/{quote(account_id, safe='')}"
                    )
            except httpx.TimeoutException as e:
                gateway_failure_counter.labels(endpoint="account").inc()
                raise GatewayError(f"Account service timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                gateway_failure_counter.labels(endpoint="account").inc()
                logger.warning("Account service unreachable: %s", e)
                raise GatewayError("Account service unavailable") from e

        if not response.is_success:
            gateway_failure_counter.labels(endpoint="account").inc()
            error_cls = AccountNotFound if response.status_code == 404 else GatewayError
            raise error_from_response(response, error_cls)

        try:
            return AccountResponse.model_validate(response.json()).to_snapshot()
        except (PayloadError, ValueError) as e:
            raise GatewayError(f"Invalid account data from account service: {e}") from e
