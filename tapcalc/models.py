"""Calculator state and key-press records.

CalculatorState holds the four registers of one session plus the repeat
memory for "=". A Tape lists the keys pressed and the display after each
one, and round-trips through JSON for the replay command.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from tapcalc.errors import TapeFormatError


class Operator(str, Enum):
    """Operator keys. EQUALS is the only non-binary one."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    EQUALS = "="

    @property
    def is_binary(self) -> bool:
        return self is not Operator.EQUALS


class Phase(str, Enum):
    """Where the engine sits in its operand/operator cycle."""

    EMPTY = "empty"
    ACCUMULATOR_SET = "accumulator-set"
    AWAITING_OPERAND = "awaiting-operand"


@dataclass
class CalculatorState:
    """Everything one calculator session remembers between key presses."""

    display: str = "0"
    accumulator: Optional[float] = None
    pending: Optional[Operator] = None
    awaiting_entry: bool = False

    # Repeat memory for "=": the last binary operator applied and its right operand
    last_operator: Optional[Operator] = None
    last_operand: Optional[float] = None

    @property
    def phase(self) -> Phase:
        if self.accumulator is None:
            return Phase.EMPTY
        if self.pending is None:
            return Phase.ACCUMULATOR_SET
        return Phase.AWAITING_OPERAND


@dataclass
class TapeEntry:
    """One key press and the display it produced."""

    key: str
    display: str
    phase: str = Phase.EMPTY.value

    def to_dict(self) -> dict:
        return {"key": self.key, "display": self.display, "phase": self.phase}


@dataclass
class Tape:
    """Record of a key sequence run through the engine."""

    entries: list[TapeEntry] = field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        return [e.key for e in self.entries]

    @property
    def final_display(self) -> str:
        if not self.entries:
            return "0"
        return self.entries[-1].display

    def record(self, key: str, display: str, phase: Phase) -> TapeEntry:
        entry = TapeEntry(key=key, display=display, phase=phase.value)
        self.entries.append(entry)
        return entry

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "entries": [e.to_dict() for e in self.entries],
            "final_display": self.final_display,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Tape:
        """Deserialize from a JSON dict (tape.json)."""
        raw = d.get("entries")
        if not isinstance(raw, list):
            raise TapeFormatError("tape has no 'entries' list")
        entries = []
        for item in raw:
            if not isinstance(item, dict) or "key" not in item:
                raise TapeFormatError(f"malformed tape entry: {item!r}")
            entries.append(TapeEntry(
                key=str(item["key"]),
                display=str(item.get("display", "")),
                phase=str(item.get("phase", Phase.EMPTY.value)),
            ))
        return cls(entries=entries)

    def save(self, path: Path) -> None:
        """Write the tape as JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> Tape:
        """Load a tape written by save()."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as e:
            raise TapeFormatError(f"cannot read tape {path}: {e}") from e
        if not isinstance(data, dict):
            raise TapeFormatError(f"tape {path} is not a JSON object")
        return cls.from_dict(data)
