"""Structured JSON logging for session and payment outcomes"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from bank_portal.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Console front end owns stdout, so logs go to stderr
    handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_login(account_id: str, succeeded: bool, duration_ms: float, error: str | None = None) -> None:
    """Log structured login outcome"""
    logging.info(
        "Login completed",
        extra={
            "account_id": account_id,
            "step": "login_complete",
            "outcome": "succeeded" if succeeded else "failed",
            "error": error,
            "duration_ms": duration_ms,
        },
    )


def log_payment(
    sender_account_id: str | None,
    outcome: str,
    duration_ms: float,
    idempotency_key: str | None = None,
    error: str | None = None,
) -> None:
    """Log structured payment outcome"""
    logging.info(
        "Payment completed",
        extra={
            "account_id": sender_account_id,
            "step": "payment_complete",
            "outcome": outcome,
            "idempotency_key": idempotency_key,
            "error": error,
            "duration_ms": duration_ms,
        },
    )
