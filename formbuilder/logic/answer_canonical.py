"""Canonicalization helpers for recorded answer values.

Answers arrive as JSON scalars or lists. Conditional visibility compares
them as text and the integer/decimal validators coerce them to numbers; both
conversions follow the rules browsers apply (``String(value)`` and
``Number(value)``) so that forms behave identically whether an answer was
checked client-side or by this service.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_DECIMAL_LITERAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_RADIX_LITERALS = {
    "0x": (16, re.compile(r"^[0-9a-fA-F]+$")),
    "0o": (8, re.compile(r"^[0-7]+$")),
    "0b": (2, re.compile(r"^[01]+$")),
}
_INFINITY_LITERALS = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}

# Magnitudes outside [1e-6, 1e21) are written in exponent form
_EXPONENT_HIGH = 21
_EXPONENT_LOW = -6


def _float_to_text(value: float) -> str:
    if value == 0:
        return "0"
    if value < 0:
        return "-" + _float_to_text(-value)
    # repr gives the shortest digit string that round-trips
    _, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k
    if k <= n <= _EXPONENT_HIGH:
        return digits + "0" * (n - k)
    if 0 < n <= _EXPONENT_HIGH:
        return f"{digits[:n]}.{digits[n:]}"
    if _EXPONENT_LOW < n <= 0:
        return "0." + "0" * (-n) + digits
    power = n - 1
    sign = "+" if power >= 0 else "-"
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{mantissa}e{sign}{abs(power)}"


def _number_to_text(value: float | int) -> str:
    if isinstance(value, int):
        if abs(value) < 10**_EXPONENT_HIGH:
            return str(value)
        value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return _float_to_text(value)


def stringify_answer_value(value: Any) -> str:
    """Return the textual form of an answer value.

    - Booleans -> "true" / "false"
    - Numbers  -> shortest round-trip digits, exponent form below 1e-6
                  and from 1e21 up (`1e-7`, `1e+21`)
    - Lists    -> elements stringified and joined with ","
    - None     -> "null"
    - Text     -> as-is
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_to_text(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify_answer_value(item) for item in value)
    return str(value)


def _coerce_text(text: str) -> float:
    stripped = text.strip()
    if not stripped:
        return 0.0
    if stripped in _INFINITY_LITERALS:
        return _INFINITY_LITERALS[stripped]
    prefix = stripped[:2].lower()
    if prefix in _RADIX_LITERALS:
        base, body_pattern = _RADIX_LITERALS[prefix]
        body = stripped[2:]
        if not body_pattern.match(body):
            return math.nan
        return float(int(body, base))
    if _DECIMAL_LITERAL.match(stripped):
        return float(stripped)
    return math.nan


def coerce_number(value: Any) -> float:
    """Coerce an answer value to a float, returning NaN when not numeric.

    Empty or whitespace-only text coerces to 0 and a single-element list
    coerces to its element, mirroring browser number conversion.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return _coerce_text(value)
    if isinstance(value, (list, tuple)):
        return _coerce_text(stringify_answer_value(value))
    return math.nan


__all__ = ["stringify_answer_value", "coerce_number"]
