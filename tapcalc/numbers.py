"""Number text and arithmetic helpers for the calculator display.

The display is always text. These helpers turn display text into floats and
back, and apply the four operators without ever raising: division by zero,
negative square roots and overflow all come back as IEEE-754 infinities or
NaN, which format_number() renders as the sentinels below.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from tapcalc.models import Operator

INFINITY_TEXT = "Infinity"
NAN_TEXT = "NaN"
SENTINELS = (INFINITY_TEXT, f"-{INFINITY_TEXT}", NAN_TEXT)

# Longest numeric prefix: sign, then Infinity or digits with one optional point
# and an optional exponent. Anything after the prefix is ignored.
_NUMBER_PREFIX_RE = re.compile(
    r"^\s*([+-]?)(Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

# Positional notation is used while the decimal exponent stays in (-7, 21].
_MAX_POSITIONAL_EXP = 21
_MIN_POSITIONAL_EXP = -6


def parse_display(text: str) -> float:
    """Parse the numeric prefix of display text.

    Args:
        text: Display string, e.g. "12.5", "0.", "-Infinity".

    Returns:
        The parsed float, or NaN when the text has no numeric prefix.
    """
    m = _NUMBER_PREFIX_RE.match(text)
    if not m:
        return math.nan
    sign, body = m.groups()
    value = math.inf if body == INFINITY_TEXT else float(body)
    return -value if sign == "-" else value


def format_number(value: float) -> str:
    """Render a float the way the calculator display shows it.

    Shortest round-trip digits, no trailing ".0" on integers, "-0" shown as
    "0", scientific notation only for very large or very small magnitudes.

    Args:
        value: Any float, including infinities and NaN.

    Returns:
        Display text, e.g. "8", "0.30000000000000004", "1e+21", "Infinity".
    """
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return INFINITY_TEXT if value > 0 else f"-{INFINITY_TEXT}"
    if value == 0:
        return "0"

    # repr() gives the shortest digit string that round-trips
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1

    text = "".join(str(d) for d in digits)
    k = len(text)
    n = k + exponent  # position of the decimal point relative to the digits

    if k <= n <= _MAX_POSITIONAL_EXP:
        body = text + "0" * (n - k)
    elif 0 < n <= _MAX_POSITIONAL_EXP:
        body = f"{text[:n]}.{text[n:]}"
    elif _MIN_POSITIONAL_EXP < n <= 0:
        body = "0." + "0" * (-n) + text
    else:
        e = n - 1
        mantissa = text if k == 1 else f"{text[0]}.{text[1:]}"
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"

    return f"-{body}" if value < 0 else body


def is_sentinel(text: str) -> bool:
    """True when display text is one of the Infinity/NaN sentinels."""
    return text in SENTINELS


def _divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    # Sign of the infinity follows both operands, including a signed zero divisor
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def apply_operator(op: Operator, a: float, b: float) -> float:
    """Apply a binary operator to (a, b).

    Args:
        op: ADD, SUBTRACT, MULTIPLY or DIVIDE.
        a: Left operand (the accumulator).
        b: Right operand (the display value).

    Returns:
        The result. Division by zero gives ±inf, or NaN for 0/0.

    Raises:
        ValueError: If op is EQUALS, which has no arithmetic of its own.
    """
    if op is Operator.ADD:
        return a + b
    if op is Operator.SUBTRACT:
        return a - b
    if op is Operator.MULTIPLY:
        return a * b
    if op is Operator.DIVIDE:
        return _divide(a, b)
    raise ValueError(f"{op.name} is not a binary operator")


def safe_sqrt(value: float) -> float:
    """Square root that returns NaN instead of raising for negative input."""
    if math.isnan(value) or value < 0:
        return math.nan
    return math.sqrt(value)
