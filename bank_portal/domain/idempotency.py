"""Idempotency key generation for payment attempts"""

import itertools
import secrets
import time

_sequence = itertools.count(1)


def generate_idempotency_key() -> str:
    """
    Build a fresh key for one payment attempt.

    Format: "<epoch millis>-<sequence>-<random hex>", e.g.
    "1760870400123-7-9f2c4a1be0d3". The sequence makes keys from the same
    millisecond distinct within a process; the random part keeps them
    distinct across processes.
    """
    millis = int(time.time() * 1000)
    return f"{millis}-{next(_sequence)}-{secrets.token_hex(6)}"
