"""
Lenient numeric coercion used at every numeric input boundary of the billing code.

Form fields arrive as free text, so a malformed value never raises here: it
contributes zero instead. Strings are read from their leading numeric prefix
(``"12abc"`` -> 12, ``"abc"`` -> 0). NaN, infinities, booleans and ``None``
all become zero. Negative values are passed through unchanged.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")

_DECIMAL_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"[+-]?\d+")


def parse_number_or_zero(value: Any) -> Decimal:
    """Coerce ``value`` to a finite Decimal, or ``Decimal(0)`` when it isn't one."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return ZERO
        # str() keeps the short repr ("0.1") instead of the binary expansion
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        match = _DECIMAL_PREFIX.match(value.lstrip())
        if match is None:
            return ZERO
        try:
            parsed = Decimal(match.group())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not parsed.is_finite() or parsed == 0:
        return ZERO
    return parsed


def parse_int_or_zero(value: Any) -> int:
    """Coerce ``value`` to an int, truncating toward zero, or 0 when it isn't one."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _INT_PREFIX.match(value.lstrip())
        return int(match.group()) if match else 0
    if isinstance(value, (float, Decimal)):
        number = parse_number_or_zero(value)
        return int(number)
    return 0
