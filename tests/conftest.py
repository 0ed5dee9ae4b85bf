"""Pytest fixtures for testing"""

import asyncio
import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from bank_portal.controller import SessionController
from bank_portal.infrastructure.clients.accounts import AccountGateway
from bank_portal.infrastructure.clients.payments import PaymentClient
from bank_portal.services.payments import PaymentSubmitter
from mock_bank.main import create_app

ACCOUNT_API = "http://accounts.test"
PAYMENT_API = "http://payments.test"
SEED_FILE = Path(__file__).resolve().parents[1] / "mock_bank" / "accounts.json"


def account_payload(
    account_number: str = "ACC-001-A",
    holder: str = "Alice",
    balance: float = 100.0,
    transactions: list[dict] | None = None,
) -> dict[str, Any]:
    """Account service response body"""
    return {
        "accountNumber": account_number,
        "accountHolderName": holder,
        "balance": balance,
        "transactions": [] if transactions is None else transactions,
    }


class StubBackend:
    """
    Scripted stand-in for both backend services.

    Responses are served in the order they were queued; every request is
    recorded. Set `gate` to hold requests until the event is set.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.gate: asyncio.Event | None = None
        self._replies: list[Callable[[httpx.Request], httpx.Response]] = []

    def reply(self, status_code: int = 200, json: Any = None, content: bytes | None = None) -> "StubBackend":
        if content is not None:
            self._replies.append(lambda request: httpx.Response(status_code, content=content))
        else:
            self._replies.append(lambda request: httpx.Response(status_code, json=json))
        return self

    def fail(self, exc_cls: type[httpx.RequestError], message: str = "boom") -> "StubBackend":
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc_cls(message, request=request)

        self._replies.append(raise_error)
        return self

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if not self._replies:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self._replies.pop(0)(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests if request.method == "POST"]


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def gateway(backend: StubBackend) -> AccountGateway:
    return AccountGateway(base_url=ACCOUNT_API, transport=backend.transport)


@pytest.fixture
def payment_client(backend: StubBackend) -> PaymentClient:
    return PaymentClient(base_url=PAYMENT_API, transport=backend.transport)


@pytest.fixture
def submitter(payment_client: PaymentClient, gateway: AccountGateway) -> PaymentSubmitter:
    return PaymentSubmitter(payment_client, gateway, currency="Eur")


@pytest.fixture
def controller(gateway: AccountGateway, submitter: PaymentSubmitter) -> SessionController:
    return SessionController(gateway, submitter)


@pytest.fixture
def seed_accounts() -> list[dict]:
    return json.loads(SEED_FILE.read_text())


@pytest.fixture
def mock_app(seed_accounts: list[dict]):
    """Fresh in-memory mock bank per test"""
    return create_app(seed_accounts)


@pytest.fixture
def bank_client(mock_app) -> TestClient:
    return TestClient(mock_app)


@pytest.fixture
def live_controller(mock_app) -> SessionController:
    """Controller talking to the mock bank in-process"""
    transport = httpx.ASGITransport(app=mock_app)
    gateway = AccountGateway(base_url=ACCOUNT_API, transport=transport)
    payments = PaymentClient(base_url=PAYMENT_API, transport=transport)
    return SessionController(gateway, PaymentSubmitter(payments, gateway, currency="Eur"))
