"""Lenient parsing and formatting of numeric command-line values."""

import logging
import math
import re
from decimal import Decimal
from typing import Optional, Union

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_int_or_default(value: Optional[str], default: int, name: str = "value") -> int:
    """Parse the leading integer of a string, falling back to a default.

    Trailing garbage is ignored ("128k" -> 128). A string with no leading
    integer yields the default instead of an error.

    Args:
        value: Raw flag value
        default: Value used when nothing can be parsed
        name: Flag name for the debug message

    Returns:
        Parsed integer or the default
    """
    if value is None:
        return default

    match = _INT_PREFIX.match(value)
    if match is None:
        logger.debug("Could not parse %s=%r, using default %s", name, value, default)
        return default

    return int(match.group(1))


def parse_seconds(value: Optional[str]) -> Optional[float]:
    """Parse a seconds value.

    Unparseable input becomes NaN so that option validation rejects it.

    Args:
        value: Raw flag value (e.g., "5", "12.5")

    Returns:
        Seconds as float, or None if no value was given
    """
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return math.nan


def format_seconds(seconds: Union[int, float]) -> str:
    """Format seconds for an FFmpeg time argument.

    Args:
        seconds: Time in seconds

    Returns:
        Fixed-point string without a trailing ".0" for whole seconds
        (5.0 -> "5", 0.00001 -> "0.00001")
    """
    if float(seconds).is_integer():
        return str(int(seconds))
    # FFmpeg time syntax has no exponent notation
    return format(Decimal(repr(float(seconds))), "f")
