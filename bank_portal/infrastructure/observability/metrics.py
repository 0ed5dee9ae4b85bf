"""Prometheus metrics for login outcomes, payment outcomes, and backend call performance"""

from prometheus_client import Counter, Histogram

from bank_portal.domain.models import SubmissionResult

# Session metrics
login_counter = Counter(
    "bank_portal_login_total",
    "Login attempts by outcome",
    ["outcome"],  # succeeded | failed
)

payment_counter = Counter(
    "bank_portal_payment_total",
    "Payment submissions by outcome",
    ["outcome"],  # succeeded | refresh_failed | failed | rejected
)

# Backend metrics
gateway_latency_histogram = Histogram(
    "bank_portal_gateway_latency_seconds",
    "Backend service response time",
    ["endpoint"],  # account | payment
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

gateway_failure_counter = Counter(
    "bank_portal_gateway_failures_total",
    "Failed backend calls",
    ["endpoint"],
)


def record_login(succeeded: bool) -> None:
    login_counter.labels(outcome="succeeded" if succeeded else "failed").inc()


def payment_outcome(result: SubmissionResult | None, rejected: bool = False) -> str:
    """Classify a payment attempt for the payment counter"""
    if rejected:
        return "rejected"
    if result is None:
        return "failed"
    return "succeeded" if result.refreshed else "refresh_failed"


def record_payment(outcome: str) -> None:
    payment_counter.labels(outcome=outcome).inc()
