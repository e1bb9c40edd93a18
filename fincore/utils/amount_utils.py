"""Numeric coercion for amounts decoded from JSON"""

import math
from decimal import Decimal
from typing import Any


def to_amount(value: Any) -> float:
    """
    Coerce a decoded amount (int, float, Decimal or numeric string) to float.

    Raises:
        ValueError: If the value is not numeric or not finite
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise ValueError(f"Expected a number, got {value!r}")
    amount = float(value)
    if not math.isfinite(amount):
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount
