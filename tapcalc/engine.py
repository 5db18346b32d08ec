"""Arithmetic entry engine — the calculator's operation state machine.

Interprets digit, operator and command presses against a one-register
accumulator. There is no precedence: each operator press evaluates the
previous pending operator immediately, left to right.

    calc = Calculator()
    calc.input_digit(5)
    calc.perform_operation("+")
    calc.input_digit(3)
    calc.perform_operation("=")  # "8"
    calc.perform_operation("=")  # "11", repeats "+ 3"

Every operation mutates the state and returns the new display text. Bad
arithmetic never raises; it shows up as "Infinity", "-Infinity" or "NaN".
"""

from __future__ import annotations

from typing import Optional, Union

from tapcalc.errors import InvalidKeyError
from tapcalc.models import CalculatorState, Operator, Phase
from tapcalc.numbers import apply_operator, format_number, parse_display, safe_sqrt


def _digit_text(digit: Union[int, str]) -> str:
    """Validate a digit key and return its single-character text."""
    if isinstance(digit, bool):
        raise InvalidKeyError(digit)
    if isinstance(digit, int) and 0 <= digit <= 9:
        return str(digit)
    if isinstance(digit, str) and len(digit) == 1 and digit in "0123456789":
        return digit
    raise InvalidKeyError(digit)


class Calculator:
    """Four-function calculator with chained operator evaluation."""

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        self.state = state or CalculatorState()

    @property
    def display(self) -> str:
        return self.state.display

    @property
    def phase(self) -> Phase:
        return self.state.phase

    # --- entry ---

    def input_digit(self, digit: Union[int, str]) -> str:
        """Append a digit, or start a fresh number right after an operator."""
        d = _digit_text(digit)
        s = self.state
        if s.awaiting_entry:
            s.display = d
            s.awaiting_entry = False
        else:
            # Only an exact "0" is replaced; "0." keeps its point
            s.display = d if s.display == "0" else s.display + d
        return s.display

    def input_decimal_point(self) -> str:
        s = self.state
        if s.awaiting_entry:
            s.display = "0."
            s.awaiting_entry = False
        elif "." not in s.display:
            s.display += "."
        return s.display

    # --- commands ---

    def clear_all(self) -> str:
        self.state = CalculatorState()
        return self.state.display

    def toggle_sign(self) -> str:
        self.state.display = format_number(-1 * parse_display(self.state.display))
        return self.state.display

    def input_percent(self) -> str:
        self.state.display = format_number(parse_display(self.state.display) / 100)
        return self.state.display

    def square_root(self) -> str:
        """Square root of the display. Negative input shows "NaN"."""
        self.state.display = format_number(safe_sqrt(parse_display(self.state.display)))
        return self.state.display

    # --- operators ---

    def perform_operation(self, op: Union[Operator, str]) -> str:
        """Press an operator key.

        Applies the pending operator (if any) to the accumulator and the
        display value, then makes ``op`` the new pending operator. When the
        pending operator is EQUALS, another "=" repeats the last binary
        operator with its last right operand; a binary operator just takes
        the display value as the new left operand.

        Args:
            op: An Operator or its symbol ("+", "-", "*", "/", "=").

        Returns:
            The display after the press.
        """
        try:
            op = Operator(op)
        except ValueError:
            raise InvalidKeyError(op) from None

        s = self.state
        value = parse_display(s.display)

        if s.accumulator is None:
            s.accumulator = value
        elif s.pending is not None:
            if s.pending.is_binary:
                self._apply(s.pending, s.accumulator, value)
            elif op is Operator.EQUALS and s.last_operator is not None:
                self._apply(s.last_operator, value, s.last_operand)
            else:
                s.accumulator = value

        s.awaiting_entry = True
        s.pending = op
        return s.display

    def _apply(self, op: Operator, left: float, right: float) -> None:
        s = self.state
        result = apply_operator(op, left, right)
        s.last_operator = op
        s.last_operand = right
        s.accumulator = result
        s.display = format_number(result)
