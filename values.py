"""Runtime values.

A value is one of: Number (``float``), String (``str``), Boolean (``bool``),
Null (``None``) or Range (``RangeValue``). There is no separate integer type.
"""

import math
from decimal import Decimal

TRUE_TEXT = "सत्य"
FALSE_TEXT = "असत्य"
NULL_TEXT = "null"


class RangeValue:
    """Finite ascending sequence 0..n-1, only produced by the range builtin."""

    def __init__(self, count: int):
        self.count = max(count, 0)

    def __iter__(self):
        return (float(i) for i in range(self.count))

    def __len__(self):
        return self.count

    def __eq__(self, other):
        return isinstance(other, RangeValue) and other.count == self.count

    def __repr__(self):
        return f"RangeValue({self.count})"


def kind_name(value) -> str:
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, float):
        return "Number"
    if isinstance(value, str):
        return "String"
    if value is None:
        return "Null"
    if isinstance(value, RangeValue):
        return "Range"
    raise TypeError(f"not a runtime value: {value!r}")


def format_number(n: float) -> str:
    # integral values print without a decimal point and never in exponent form
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    text = format(Decimal(repr(n)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_text(value) -> str:
    """Canonical textual form used by print and string concatenation."""
    if isinstance(value, bool):
        return TRUE_TEXT if value else FALSE_TEXT
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if value is None:
        return NULL_TEXT
    if isinstance(value, RangeValue):
        return "[" + ", ".join(format_number(i) for i in value) + "]"
    raise TypeError(f"not a runtime value: {value!r}")
