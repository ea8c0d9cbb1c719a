"""
Booking reference generation.

References are short display identifiers such as ``BK12345678``. The
timestamp form is not unique across concurrent calls; callers must rely on
the ``booking_reference`` unique constraint and regenerate on conflict.
"""

import secrets
import time
from typing import Optional

from hotelbook.config.settings import settings


def _format(number: int, prefix: Optional[str], digits: Optional[int]) -> str:
    prefix = settings.BOOKING_REFERENCE_PREFIX if prefix is None else prefix
    digits = digits or settings.BOOKING_REFERENCE_DIGITS
    return f"{prefix}{number % (10 ** digits):0{digits}d}"


def generate_booking_reference(
    now_ms: Optional[int] = None,
    prefix: Optional[str] = None,
    digits: Optional[int] = None,
) -> str:
    """
    Prefix followed by the last ``digits`` digits of epoch milliseconds.

    Args:
        now_ms: Epoch milliseconds to use instead of the clock
        prefix: Reference prefix (defaults to settings)
        digits: Width of the numeric suffix (defaults to settings)
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return _format(now_ms, prefix, digits)


def generate_random_reference(prefix: Optional[str] = None, digits: Optional[int] = None) -> str:
    """Same shape as the timestamp reference, with a random suffix."""
    digits = digits or settings.BOOKING_REFERENCE_DIGITS
    return _format(secrets.randbelow(10 ** digits), prefix, digits)
