"""Environment-driven settings for the tapcalc CLI.

Self-contained — reads TAPCALC_* variables with defaults, no config files.
The engine itself takes no configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_WIDTH = 24
DEFAULT_PROMPT = "tapcalc> "

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """CLI presentation settings."""

    trace: bool = False
    width: int = DEFAULT_WIDTH
    prompt: str = DEFAULT_PROMPT


def _parse_width(raw: Optional[str]) -> int:
    """Positive integer width, or the default for anything else."""
    if not raw:
        return DEFAULT_WIDTH
    try:
        width = int(raw)
    except ValueError:
        return DEFAULT_WIDTH
    return width if width > 0 else DEFAULT_WIDTH


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        env: Mapping to read instead of os.environ (used by tests).

    Returns:
        Settings with TAPCALC_TRACE, TAPCALC_WIDTH and TAPCALC_PROMPT applied.
    """
    env = os.environ if env is None else env
    return Settings(
        trace=env.get("TAPCALC_TRACE", "").strip().lower() in _TRUTHY,
        width=_parse_width(env.get("TAPCALC_WIDTH")),
        prompt=env.get("TAPCALC_PROMPT", DEFAULT_PROMPT),
    )
