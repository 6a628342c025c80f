"""Runtime value helpers for tinylox.

The language has four kinds of values and they map directly onto Python
objects: `None` is nil, `bool` is a boolean, `float` is a number and
`str` is a string. Literal values carried by tokens and AST nodes use the
same representation, so there is no conversion between compile time and
run time.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any


def type_name(value: Any) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def format_number(value: float) -> str:
    """Render a number in positional notation.

    Integral values always keep one fractional digit (`3.0`), other values
    use the shortest digits that round-trip. Exponent notation is never
    produced, so `1e21` renders as `1000000000000000000000.0`.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' not in text:
        text += '.0'
    return text


def to_string(value: Any) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    return str(value)
