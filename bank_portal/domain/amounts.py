"""Money parsing and display helpers"""

import math
from decimal import Decimal, InvalidOperation

from bank_portal.domain.exceptions import InvalidAmount

# amounts travel to the payment service as a JSON float
MAX_SIGNIFICANT_DIGITS = 15


def parse_amount(text: str) -> Decimal:
    """
    Parse user-entered payment amount.

    The amount must survive conversion to a float unchanged: more than
    MAX_SIGNIFICANT_DIGITS significant digits, or a magnitude a float
    cannot hold, is rejected.

    Raises:
        InvalidAmount: If text is not a finite decimal number greater than zero
    """
    try:
        amount = Decimal(text.strip())
    except (InvalidOperation, AttributeError) as e:
        raise InvalidAmount() from e

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount()
    if not 0 < float(amount) < math.inf:
        raise InvalidAmount()
    if len(amount.normalize().as_tuple().digits) > MAX_SIGNIFICANT_DIGITS:
        raise InvalidAmount()
    return amount


def format_money(amount: Decimal) -> str:
    """Format as dollars with two decimals: Decimal('-5') -> '-$5.00'"""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
