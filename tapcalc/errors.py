"""Exception types for tapcalc.

Arithmetic never raises: division by zero, negative square roots and overflow
all end up as sentinel display text. These exceptions only cover input that
is not a calculator key at all, and tape files that cannot be read.
"""

from __future__ import annotations


class TapcalcError(Exception):
    """Base class for all tapcalc errors."""


class InvalidKeyError(TapcalcError, ValueError):
    """A token or digit that does not map to any calculator key."""

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__(f"Unknown key: {token!r}")


class TapeFormatError(TapcalcError, ValueError):
    """A saved tape file that is missing, unreadable or malformed."""
