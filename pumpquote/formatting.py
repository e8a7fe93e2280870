"""
Amount presentation. Quotes are always rounded up to the next whole unit.
"""

import math
from typing import Optional

MISSING = "—"


def ceil_amount(value: float) -> float:
    """
    Round up to a whole unit. Non-finite values pass through so a bad rate
    stays visible instead of turning into a plausible number.
    """
    if value is None or not math.isfinite(value):
        return value
    return float(math.ceil(value))


def format_amount(value: float, currency: Optional[str] = None) -> str:
    """Thousands-separated whole amount, e.g. 'NOK 1,400,000'."""
    if value is None or not math.isfinite(value):
        return MISSING
    text = f"{math.ceil(value):,}"
    if currency:
        return f"{currency} {text}"
    return text
