"""
Prefix matching of commands against configured patterns.
"""

from __future__ import annotations

from collections.abc import Sequence


def matching_pattern(command: str, patterns: Sequence[str]) -> str | None:
    """Return the first pattern that matches command at a word boundary.

    A pattern matches when it equals the command, or when the command starts
    with the pattern followed by a single space. So "ls" matches "ls" and
    "ls -la" but not "lsof", and "git status" matches "git status -s" but not
    "git diff".

    Patterns are expected to be trimmed already; command should be trimmed
    by the caller.
    """
    for pattern in patterns:
        if command == pattern or command.startswith(pattern + " "):
            return pattern
    return None


def matches(command: str, patterns: Sequence[str]) -> bool:
    """Check if command matches any pattern at a word boundary."""
    return matching_pattern(command, patterns) is not None
