"""Lenient coercion of values read from untyped JSON columns.

Stored project payloads were written by a browser form, so numbers arrive as
ints, floats, numeric strings, empty strings or nulls. These helpers reproduce
that tolerance: anything that is not a finite number counts as absent.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_LEADING_FLOAT = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def optional_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is absent or unparsable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_number(value: Any, default: float = 0.0) -> float:
    number = optional_number(value)
    return default if number is None else number


def parse_leading_float(value: Any) -> float:
    """Parse a budget figure the way the form's ``parseFloat`` did.

    Numbers pass through; strings keep their leading numeric prefix
    (``"150000 kr"`` -> 150000.0). Anything else yields 0.0.
    """
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if match is None:
            return 0.0
        return to_number(match.group(1))
    return to_number(value)


def to_flag(value: Any) -> bool:
    """Form flags are stored as booleans or as the strings "true"/"false"."""
    return value is True or value == "true"


def as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""
