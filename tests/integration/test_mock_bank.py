"""Integration tests for the mock bank HTTP contract"""

from fastapi.testclient import TestClient


def _pay(client: TestClient, amount: float, key: str, sender="ACC-001-A", receiver="ACC-002-B"):
    return client.post(
        "/api/payments/initiate",
        json={
            "senderAccountId": sender,
            "receiverAccountId": receiver,
            "amount": amount,
            "currency": "Eur",
            "idempotencyKey": key,
        },
    )


def test_health_endpoint(bank_client: TestClient):
    """Test health check endpoint"""
    response = bank_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_account(bank_client: TestClient):
    response = bank_client.get("/api/accounts/by-account-number/ACC-001-A")

    assert response.status_code == 200
    assert response.json() == {
        "accountNumber": "ACC-001-A",
        "accountHolderName": "Alice",
        "balance": 100.0,
        "transactions": [],
    }


def test_get_unknown_account_returns_message(bank_client: TestClient):
    response = bank_client.get("/api/accounts/by-account-number/ACC-404")

    assert response.status_code == 404
    assert response.json() == {"message": "Account not found: ACC-404"}


def test_payment_moves_money_and_prepends_history(bank_client: TestClient):
    """Test payment debits sender, credits receiver and records both"""
    response = _pay(bank_client, 50.0, "k-1")

    assert response.status_code == 200
    assert "initiated successfully" in response.json()["message"]

    alice = bank_client.get("/api/accounts/by-account-number/ACC-001-A").json()
    bob = bank_client.get("/api/accounts/by-account-number/ACC-002-B").json()
    assert alice["balance"] == 50.0
    assert alice["transactions"][0]["type"] == "debit"
    assert alice["transactions"][0]["amount"] == -50.0
    assert bob["balance"] == 300.0
    assert bob["transactions"][0]["type"] == "credit"
    assert bob["transactions"][0]["description"] == "Payment from ACC-001-A"
    assert len(bob["transactions"]) == 3


def test_repeated_idempotency_key_is_collapsed(bank_client: TestClient):
    """Test duplicate key returns the first response without moving money again"""
    first = _pay(bank_client, 10.0, "same-key")
    second = _pay(bank_client, 10.0, "same-key")

    assert second.status_code == 200
    assert second.json() == first.json()
    alice = bank_client.get("/api/accounts/by-account-number/ACC-001-A").json()
    assert alice["balance"] == 90.0
    assert len(alice["transactions"]) == 1


def test_insufficient_funds(bank_client: TestClient):
    response = _pay(bank_client, 1000.0, "k-big")

    assert response.status_code == 400
    assert response.json() == {"message": "Insufficient funds"}


def test_unknown_receiver(bank_client: TestClient):
    response = _pay(bank_client, 1.0, "k-x", receiver="ACC-999")

    assert response.status_code == 404
    assert response.json()["message"] == "Receiver account not found: ACC-999"


def test_self_payment_rejected(bank_client: TestClient):
    response = _pay(bank_client, 1.0, "k-self", receiver="ACC-001-A")
    assert response.status_code == 400


def test_invalid_payment_body_returns_message(bank_client: TestClient):
    response = _pay(bank_client, -5.0, "k-neg")

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid payment request"}
