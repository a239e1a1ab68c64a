"""
Rewrite decision for a single command.

Runs an ordered chain of guards. The first guard that fails leaves the command
unchanged; a command that passes all of them is rewritten. Pure: no I/O, no
logging, config is only read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from rtk_hook.core.config import Config
from rtk_hook.core.patterns import matches
from rtk_hook.core.rewriter import COMPRESSOR, head_token, rewrite
from rtk_hook.core.safety import is_simple

# Guard reasons, in evaluation order
DISABLED = "disabled"
EMPTY = "empty command"
ALREADY_WRAPPED = "already wrapped"
COMPOUND = "compound command"
NO_MATCH = "no matching pattern"

# Rewrite kinds
ALIAS = "alias"
PREFIX = "prefix"


@dataclass(frozen=True)
class Decision:
    """Result of deciding on a command."""

    action: Literal["unchanged", "rewritten"]
    reason: str
    command: str | None = None  # set when action="rewritten"

    @property
    def rewritten(self) -> bool:
        return self.action == "rewritten"

    def __repr__(self) -> str:
        if self.rewritten:
            return f"Decision('rewritten', {self.command!r})"
        return f"Decision('unchanged', {self.reason!r})"


def decide(command: str, config: Config) -> Decision:
    """Decide whether command should run through rtk, and how."""
    if not config.enabled:
        return Decision("unchanged", DISABLED)

    trimmed = command.strip()
    if not trimmed:
        return Decision("unchanged", EMPTY)

    if trimmed.startswith(COMPRESSOR + " "):
        return Decision("unchanged", ALREADY_WRAPPED)

    if not is_simple(trimmed):
        return Decision("unchanged", COMPOUND)

    if not matches(trimmed, config.patterns):
        return Decision("unchanged", NO_MATCH)

    kind = ALIAS if head_token(trimmed) in config.aliases else PREFIX
    return Decision("rewritten", kind, rewrite(trimmed, config.aliases))
