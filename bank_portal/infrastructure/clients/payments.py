"""Payment service HTTP client for initiating transfers"""

import logging

import httpx

from bank_portal.config import settings
from bank_portal.domain.exceptions import GatewayError
from bank_portal.domain.models import PaymentRequest
from bank_portal.infrastructure.clients.errors import error_from_response, server_message
from bank_portal.infrastructure.clients.schemas import PaymentInitiateRequest
from bank_portal.infrastructure.observability.metrics import (
    gateway_failure_counter,
    gateway_latency_histogram,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIRMATION = "Payment successful!"


class PaymentClient:
    """Client for the payment service's initiate endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.payment_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def initiate(self, request: PaymentRequest) -> str:
        """
        Send one payment attempt. Single request, no retries: a retry is a
        new attempt with a new idempotency key, built by the caller.

        Returns:
            Confirmation message from the service, or a default one

        Raises:
            GatewayError: On HTTP errors, timeouts, or network failures
        """
        payload = PaymentInitiateRequest.from_request(request).model_dump()

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with gateway_latency_histogram.labels(endpoint="payment").time():
                    response = await client.post(
                        f"{self.base_url}/api/payments/initiate",
                        json=payload,
                    )
            except httpx.TimeoutException as e:
                gateway_failure_counter.labels(endpoint="payment").inc()
                raise GatewayError(f"Payment service timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                gateway_failure_counter.labels(endpoint="payment").inc()
                logger.warning("Payment service unreachable: %s", e)
                raise GatewayError("Payment service unavailable") from e

        if not response.is_success:
            gateway_failure_counter.labels(endpoint="payment").inc()
            raise error_from_response(response)

        return server_message(response) or DEFAULT_CONFIRMATION
