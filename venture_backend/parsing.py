"""Parsing of numeric fields from JSON request bodies."""

import math

from venture_backend.errors import InvalidParameter


def parse_number(name, value):
    """
    ``value`` as a finite float. JSON numbers and numeric strings are
    accepted; booleans, NaN and infinities are not.
    """
    if isinstance(value, bool):
        raise InvalidParameter(f"{name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a number") from None
    if not math.isfinite(number):
        raise InvalidParameter(f"{name} must be finite")
    return number
