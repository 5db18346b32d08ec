"""tapcalc — a four-function calculator with chained operator evaluation.

Each operator press evaluates immediately against a single accumulator, left
to right, the way a pocket calculator does. Bad arithmetic never raises: the
display shows "Infinity" or "NaN" instead.

Usage:
    python -m tapcalc press 5 + 3 + 2 =      # 10
    python -m tapcalc press 5 / 0 =          # Infinity
    python -m tapcalc keys                   # Show keypad
    python -m tapcalc repl                   # Interactive session
"""

from tapcalc.engine import Calculator
from tapcalc.models import CalculatorState, Operator, Phase, Tape

__all__ = ["Calculator", "CalculatorState", "Operator", "Phase", "Tape"]
