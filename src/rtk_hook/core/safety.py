"""
Lexical check for shell composition operators.

This is a substring scan, not a parser. A pipe inside quotes still counts as a
pipe: refusing a safe command costs nothing, rewriting a compound one breaks it.
"""

from __future__ import annotations

import re

# Order is the order explain reports them in
COMPOSITION_OPERATORS = ("|", "&&", "||", ";", "<<")

_COMPOSITION = re.compile(r"[|;]|&&|<<")


def is_simple(command: str) -> bool:
    """Return False if command contains |, &&, ||, ; or <<."""
    return _COMPOSITION.search(command) is None


def composition_operators(command: str) -> list[str]:
    """List the composition operators present in command."""
    return [op for op in COMPOSITION_OPERATORS if op in command]
