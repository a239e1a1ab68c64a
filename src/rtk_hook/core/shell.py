"""
Structural view of a command from a real bash parser (bashlex).

Only the explain diagnostic uses this, to show where the lexical check in
rtk_hook.core.safety refuses a command a parser would call simple, e.g.
grep "a|b" file. Rewrite decisions never depend on it.
"""

from __future__ import annotations

from typing import Any

import bashlex

SIMPLE = "simple"
COMPOUND = "compound"
UNPARSEABLE = "unparseable"

# Nodes that run or feed another command from inside a simple command
_NESTED_KINDS = frozenset({"commandsubstitution", "processsubstitution"})
_HEREDOC_REDIRECTS = frozenset({"<<", "<<-", "<<<"})


def _has_nested_command(node: Any) -> bool:
    """Check for substitutions or heredocs anywhere below node."""
    kind = getattr(node, "kind", None)
    if kind in _NESTED_KINDS:
        return True
    if kind == "redirect":
        if getattr(node, "type", None) in _HEREDOC_REDIRECTS:
            return True
        target = getattr(node, "output", None)
        if hasattr(target, "kind") and _has_nested_command(target):
            return True
    for child in getattr(node, "parts", None) or []:
        if _has_nested_command(child):
            return True
    return False


def parse_shape(command: str) -> str:
    """Classify command as "simple", "compound" or "unparseable".

    Simple means exactly one command node with no pipeline, list, compound
    statement, substitution or heredoc.
    """
    try:
        nodes = bashlex.parse(command)
    except Exception:
        return UNPARSEABLE
    if not nodes:
        return UNPARSEABLE
    if len(nodes) > 1 or nodes[0].kind != "command":
        return COMPOUND
    return COMPOUND if _has_nested_command(nodes[0]) else SIMPLE
