"""Keypad layout and key dispatch for tapcalc.

The calculator screen is a five-row grid of buttons:

    C    +/-  %    ÷
    7    8    9    ×
    4    5    6    -
    1    2    3    +
    √    0    .    =

Each button is a Key. Typed input (CLI arguments, REPL lines, saved tapes)
is tokenized, each token resolved to a Key, and the Key pressed on a
Calculator. run_sequence() records every press on a Tape.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from tapcalc.engine import Calculator
from tapcalc.errors import InvalidKeyError
from tapcalc.models import Operator, Tape


class KeyKind(str, Enum):
    """What a key does to the engine."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    COMMAND = "command"
    OPERATOR = "operator"


# Command values
CLEAR = "clear"
TOGGLE_SIGN = "toggle-sign"
PERCENT = "percent"
SQUARE_ROOT = "sqrt"


@dataclass(frozen=True)
class Key:
    """A single calculator button."""

    label: str
    kind: KeyKind
    value: str


def _digit(n: int) -> Key:
    return Key(str(n), KeyKind.DIGIT, str(n))


KEY_CLEAR = Key("C", KeyKind.COMMAND, CLEAR)
KEY_TOGGLE_SIGN = Key("+/-", KeyKind.COMMAND, TOGGLE_SIGN)
KEY_PERCENT = Key("%", KeyKind.COMMAND, PERCENT)
KEY_SQUARE_ROOT = Key("√", KeyKind.COMMAND, SQUARE_ROOT)
KEY_DECIMAL = Key(".", KeyKind.DECIMAL, ".")
KEY_ADD = Key("+", KeyKind.OPERATOR, Operator.ADD.value)
KEY_SUBTRACT = Key("-", KeyKind.OPERATOR, Operator.SUBTRACT.value)
KEY_MULTIPLY = Key("×", KeyKind.OPERATOR, Operator.MULTIPLY.value)
KEY_DIVIDE = Key("÷", KeyKind.OPERATOR, Operator.DIVIDE.value)
KEY_EQUALS = Key("=", KeyKind.OPERATOR, Operator.EQUALS.value)

KEYPAD: tuple[tuple[Key, ...], ...] = (
    (KEY_CLEAR, KEY_TOGGLE_SIGN, KEY_PERCENT, KEY_DIVIDE),
    (_digit(7), _digit(8), _digit(9), KEY_MULTIPLY),
    (_digit(4), _digit(5), _digit(6), KEY_SUBTRACT),
    (_digit(1), _digit(2), _digit(3), KEY_ADD),
    (KEY_SQUARE_ROOT, _digit(0), KEY_DECIMAL, KEY_EQUALS),
)

# Typed spellings that differ from the printed label. Lookups are lowercased.
ALIASES: dict[str, Key] = {
    "*": KEY_MULTIPLY,
    "x": KEY_MULTIPLY,
    "/": KEY_DIVIDE,
    "−": KEY_SUBTRACT,
    "sqrt": KEY_SQUARE_ROOT,
    "r": KEY_SQUARE_ROOT,
    "±": KEY_TOGGLE_SIGN,
    "+-": KEY_TOGGLE_SIGN,
    "neg": KEY_TOGGLE_SIGN,
    "n": KEY_TOGGLE_SIGN,
    "c": KEY_CLEAR,
    "ac": KEY_CLEAR,
    "clear": KEY_CLEAR,
    "enter": KEY_EQUALS,
}

_BY_LABEL: dict[str, Key] = {key.label.lower(): key for row in KEYPAD for key in row}

# "+/-" and "+-" win over "+" followed by "/" or "-"; letter runs form one token
_TOKEN_RE = re.compile(r"\+/-|\+-|[A-Za-z]+|\S")


def resolve_key(token: str) -> Key:
    """Map a printed label or alias to its Key.

    Raises:
        InvalidKeyError: If the token names no key.
    """
    t = token.strip().lower()
    key = _BY_LABEL.get(t) or ALIASES.get(t)
    if key is None:
        raise InvalidKeyError(token)
    return key


def tokenize(text: str) -> list[str]:
    """Split typed input like "12.5*3=" or "5 + 3 =" into key tokens."""
    return _TOKEN_RE.findall(text)


def press(engine: Calculator, key: Key) -> str:
    """Dispatch one key onto the engine and return the new display."""
    if key.kind is KeyKind.DIGIT:
        return engine.input_digit(key.value)
    if key.kind is KeyKind.DECIMAL:
        return engine.input_decimal_point()
    if key.kind is KeyKind.OPERATOR:
        return engine.perform_operation(key.value)

    commands = {
        CLEAR: engine.clear_all,
        TOGGLE_SIGN: engine.toggle_sign,
        PERCENT: engine.input_percent,
        SQUARE_ROOT: engine.square_root,
    }
    return commands[key.value]()


def run_sequence(
    tokens: Iterable[str],
    engine: Optional[Calculator] = None,
    tape: Optional[Tape] = None,
) -> Tape:
    """Press every token in order, recording each display on a tape.

    Keys are resolved before anything is pressed, so an invalid token leaves
    the engine untouched.

    Args:
        tokens: Key tokens, e.g. from tokenize().
        engine: Calculator to drive. A fresh one is used when omitted.
        tape: Tape to append to. A new one is created when omitted.

    Returns:
        The tape with one entry per key press.

    Raises:
        InvalidKeyError: If any token names no key.
    """
    engine = engine or Calculator()
    tape = tape if tape is not None else Tape()
    keys = [resolve_key(t) for t in tokens]
    for key in keys:
        display = press(engine, key)
        tape.record(key.label, display, engine.phase)
    return tape
