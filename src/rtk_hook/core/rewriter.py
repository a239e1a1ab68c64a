"""
Rewriting of eligible commands into rtk invocations.
"""

from __future__ import annotations

from collections.abc import Mapping

# Leading word of every rewritten command
COMPRESSOR = "rtk"


def head_token(command: str) -> str:
    """Return the first whitespace-delimited token, or "" for blank input."""
    words = command.split(None, 1)
    return words[0] if words else ""


def rewrite(command: str, aliases: Mapping[str, str]) -> str:
    """Rewrite a matched, simple command to its rtk equivalent.

    If the head token has an alias (e.g. "cat" -> "rtk read"), the head is
    swapped for the alias and the rest of the command is kept verbatim.
    Otherwise the command is prefixed with "rtk ".

    The swap is positional. "cat cat.txt" becomes "rtk read cat.txt", never
    "cat rtk read.txt".
    """
    trimmed = command.strip()
    head = head_token(trimmed)
    if head in aliases:
        return aliases[head] + trimmed[len(head):]
    return f"{COMPRESSOR} {trimmed}"
