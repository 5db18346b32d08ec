"""Tests for key resolution, tokenizing and sequence dispatch."""

import pytest

from tapcalc.engine import Calculator
from tapcalc.errors import InvalidKeyError
from tapcalc.keypad import (
    KEYPAD,
    KeyKind,
    press,
    resolve_key,
    run_sequence,
    tokenize,
)
from tapcalc.models import Phase


def display_after(text):
    return run_sequence(tokenize(text)).final_display


# --- Layout ---

def test_keypad_grid_shape():
    assert len(KEYPAD) == 5
    assert all(len(row) == 4 for row in KEYPAD)
    labels = [k.label for row in KEYPAD for k in row]
    assert len(set(labels)) == 20
    assert labels[:4] == ["C", "+/-", "%", "÷"]
    assert labels[-4:] == ["√", "0", ".", "="]


def test_every_digit_on_keypad():
    digits = sorted(k.label for row in KEYPAD for k in row if k.kind is KeyKind.DIGIT)
    assert digits == [str(d) for d in range(10)]


# --- resolve_key ---

@pytest.mark.parametrize("token, label", [
    ("7", "7"),
    ("÷", "÷"),
    ("/", "÷"),
    ("×", "×"),
    ("*", "×"),
    ("x", "×"),
    ("X", "×"),
    ("√", "√"),
    ("sqrt", "√"),
    ("SQRT", "√"),
    ("+/-", "+/-"),
    ("neg", "+/-"),
    ("+-", "+/-"),
    ("c", "C"),
    ("AC", "C"),
    ("clear", "C"),
    ("enter", "="),
    ("−", "-"),
    (" + ", "+"),
])
def test_resolve_key(token, label):
    assert resolve_key(token).label == label


@pytest.mark.parametrize("token", ["^", "10", "abc", "", "(", "sin"])
def test_resolve_unknown_key(token):
    with pytest.raises(InvalidKeyError) as exc:
        resolve_key(token)
    assert exc.value.token == token


# --- tokenize ---

def test_tokenize_compact():
    assert tokenize("12.5*3=") == ["1", "2", ".", "5", "*", "3", "="]


def test_tokenize_spaced():
    assert tokenize("5 + 3 =") == ["5", "+", "3", "="]


def test_tokenize_words_and_toggle():
    assert tokenize("9 sqrt +/- c") == ["9", "sqrt", "+/-", "c"]


def test_tokenize_plus_minus_is_one_token():
    assert tokenize("4 +- 1") == ["4", "+-", "1"]


def test_tokenize_letter_run_between_digits():
    assert tokenize("3x4") == ["3", "x", "4"]


def test_tokenize_empty():
    assert tokenize("   ") == []


# --- press / run_sequence ---

def test_press_each_kind():
    calc = Calculator()
    assert press(calc, resolve_key("9")) == "9"
    assert press(calc, resolve_key(".")) == "9."
    assert press(calc, resolve_key("+")) == "9."
    assert press(calc, resolve_key("4")) == "4"
    assert press(calc, resolve_key("√")) == "2"
    assert press(calc, resolve_key("=")) == "11"
    assert press(calc, resolve_key("%")) == "0.11"
    assert press(calc, resolve_key("+/-")) == "-0.11"
    assert press(calc, resolve_key("C")) == "0"


@pytest.mark.parametrize("keys, expected", [
    ("5+3+2=", "10"),
    ("5/0=", "Infinity"),
    ("4 +/- sqrt", "NaN"),
    ("5+3===", "14"),
    ("2+3*4=", "20"),
    ("1.5 x 4 =", "6"),
    ("1..5", "1.5"),
    ("50%", "0.5"),
    ("9+1=c", "0"),
    ("4 +-", "-4"),
    ("4+-+1=", "-3"),
])
def test_sequences(keys, expected):
    assert display_after(keys) == expected


def test_run_sequence_records_every_press():
    tape = run_sequence(["5", "+", "3", "="])
    assert tape.keys == ["5", "+", "3", "="]
    assert [e.display for e in tape.entries] == ["5", "5", "3", "8"]
    assert tape.entries[0].phase == Phase.EMPTY.value
    assert tape.entries[1].phase == Phase.AWAITING_OPERAND.value


def test_run_sequence_continues_engine_and_tape():
    calc = Calculator()
    tape = run_sequence(["2", "*"], engine=calc)
    run_sequence(["6", "="], engine=calc, tape=tape)
    assert calc.display == "12"
    assert len(tape.entries) == 4


def test_invalid_token_leaves_engine_untouched():
    calc = Calculator()
    with pytest.raises(InvalidKeyError):
        run_sequence(["5", "+", "^"], engine=calc)
    assert calc.display == "0"
    assert calc.state.accumulator is None


def test_labels_on_tape_resolve_back():
    tape = run_sequence(tokenize("9 / 3 * 2 sqrt +/- c"))
    assert run_sequence(tape.keys).final_display == tape.final_display
