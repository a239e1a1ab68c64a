"""Claude Code PreToolUse hook that routes simple commands through rtk.

This hook runs before Claude executes any Bash tool call. If the command is a
single simple command matching one of the configured patterns, it is rewritten
to the equivalent rtk invocation (e.g. "git status" -> "rtk git status",
"cat foo.txt" -> "rtk read foo.txt") so the output Claude reads is compressed.

Design assumptions:
- The decision is lexical, not parsed. Anything with |, &&, ||, ; or << runs
  untouched.
- When in doubt, leave the command alone. A missed rewrite costs tokens, a bad
  one breaks the command.
- The hook never blocks the tool call. Bad input, bad config or internal
  errors all fall back to passing the command through.

Hook behavior:
- Rewritten commands: hookSpecificOutput with updatedInput.command, and
  permissionDecision "ask" (or "allow" when auto_approve is set)
- Everything else: empty JSON object, command proceeds as typed

Decisions are logged as JSON lines when the config sets a log path.

Subcommands:
    rtk-hook                      hook mode, reads PreToolUse JSON on stdin
    rtk-hook explain <command>    show how a command would be handled
    rtk-hook gain [SESSION_ID]    rewrite stats for a session (default: latest)
    rtk-hook status               check rtk is installed and the config loads
    rtk-hook help                 this message
"""

from __future__ import annotations

import json
import shutil
import subprocess
import sys
from typing import Any, Protocol

from rtk_hook.core.config import (
    Config,
    config_path,
    configure_logging,
    load_config,
    log_decision,
    parse_config,
)
from rtk_hook.core.decision import COMPOUND, Decision, decide
from rtk_hook.core.patterns import matching_pattern
from rtk_hook.core.rewriter import COMPRESSOR, head_token
from rtk_hook.core.safety import composition_operators
from rtk_hook.core.shell import SIMPLE, parse_shape
from rtk_hook.core.stats import SessionStats, format_stats, latest_session

SHELL_TOOL_NAMES = frozenset({"Bash"})

USAGE = """\
Usage: rtk-hook [explain <command> | gain [SESSION_ID] | status | help]

With no arguments, runs as a Claude Code PreToolUse hook: reads the tool call
JSON on stdin and rewrites eligible Bash commands to run through rtk.

Commands:
  explain <command>   Show each check and the resulting decision
  gain [SESSION_ID]   Show rewrite stats for a session (default: latest)
  status              Check that rtk is on PATH and the config loads
  help                Show this help message
"""


class Recorder(Protocol):
    """Anything that tallies rewrites (RewriteCounter, SessionStats)."""

    def record(self, command: str) -> None: ...


# === Hook responses ===


def rewrite_response(
    decision: Decision, tool_input: dict[str, Any], config: Config
) -> dict[str, Any]:
    """Build the PreToolUse response that swaps in the rewritten command."""
    return {
        "hookSpecificOutput": {
            "hookEventName": "PreToolUse",
            "permissionDecision": "allow" if config.auto_approve else "ask",
            "permissionDecisionReason": f"rtk rewrite: {decision.command}",
            "updatedInput": {**tool_input, "command": decision.command},
        }
    }


def handle(
    input_data: dict[str, Any], config: Config, stats: Recorder | None = None
) -> dict[str, Any]:
    """Handle one PreToolUse payload. Returns the JSON response object."""
    if input_data.get("tool_name") not in SHELL_TOOL_NAMES:
        return {}
    tool_input = input_data.get("tool_input")
    if not isinstance(tool_input, dict):
        return {}
    command = tool_input.get("command")
    if not isinstance(command, str):
        return {}

    decision = decide(command, config)
    trimmed = command.strip()
    pattern = matching_pattern(trimmed, config.patterns)
    # Pattern or command name only; arguments are logged only with log_full
    cmd = pattern or head_token(trimmed) or "empty command"

    if not decision.rewritten:
        log_decision("unchanged", cmd, reason=decision.reason, pattern=pattern, command=trimmed)
        return {}

    if stats is not None:
        try:
            stats.record(trimmed)
        except OSError as e:
            print(f"Warning: could not record rewrite stats: {e}", file=sys.stderr)

    log_decision(
        "rewritten",
        cmd,
        reason=decision.reason,
        pattern=pattern,
        rewritten=decision.command,
        command=trimmed,
    )
    return rewrite_response(decision, tool_input, config)


def run_hook(raw: str) -> dict[str, Any]:
    """Parse stdin text, load config and handle the payload."""
    if not raw.strip():
        return {}
    try:
        input_data = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if not isinstance(input_data, dict):
        return {}

    config = load_config()
    configure_logging(config)

    session_id = input_data.get("session_id")
    stats = SessionStats(session_id) if isinstance(session_id, str) and session_id else None
    return handle(input_data, config, stats)


# === Diagnostics ===


def explain(command: str, config: Config) -> str:
    """Describe every check for command and the final decision."""
    trimmed = command.strip()
    decision = decide(command, config)
    operators = composition_operators(trimmed)
    pattern = matching_pattern(trimmed, config.patterns)
    head = head_token(trimmed)

    lines = [
        f"Command:         {trimmed!r}",
        f"Enabled:         {'yes' if config.enabled else 'no'}",
        f"Already wrapped: {'yes' if trimmed.startswith(COMPRESSOR + ' ') else 'no'}",
        f"Operators:       {' '.join(operators) if operators else 'none'}",
        f"Pattern:         {pattern!r}" if pattern else "Pattern:         none",
        f"Alias:           {head!r} -> {config.aliases[head]!r}"
        if head in config.aliases
        else "Alias:           none",
    ]
    if decision.rewritten:
        lines.append(f"Decision:        rewritten ({decision.reason}) -> {decision.command!r}")
    else:
        lines.append(f"Decision:        unchanged ({decision.reason})")

    if trimmed:
        shape = parse_shape(trimmed)
        lines.append(f"Shell parser:    {shape}")
        if decision.reason == COMPOUND and shape == SIMPLE:
            lines.append(
                "Note: a shell parser sees one simple command here; the operator "
                "is likely quoted, but the lexical check refuses it anyway."
            )
    return "\n".join(lines)


def gain(session_id: str | None = None) -> str:
    """Render rewrite stats for session_id, or the latest session."""
    session = SessionStats(session_id) if session_id else latest_session()
    if session is None:
        return "No sessions recorded yet."
    return format_stats(session.load())


def rtk_version(executable: str) -> str | None:
    """Return `rtk --version` output, or None if it can't be run."""
    try:
        result = subprocess.run(
            [executable, "--version"], capture_output=True, text=True, timeout=5
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def status() -> str:
    """Report whether rtk is installed and which config is in effect."""
    lines = []
    executable = shutil.which(COMPRESSOR)
    if executable:
        version = rtk_version(executable)
        lines.append(f"rtk:    {executable} ({version or 'unknown version'})")
    else:
        lines.append("rtk:    not found in PATH (rewritten commands will fail)")

    path = config_path()
    if not path.is_file():
        lines.append(f"Config: {path} (not found, using defaults)")
    else:
        try:
            parse_config(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            lines.append(f"Config: {path} (invalid, using defaults: {e})")
        else:
            lines.append(f"Config: {path} (loaded)")
    return "\n".join(lines)


# === Entry point ===


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv

    if not args:
        try:
            output = run_hook(sys.stdin.read())
        except Exception as e:
            # Never block the tool call; the command runs as typed
            print(f"rtk-hook: {e}", file=sys.stderr)
            output = {}
        print(json.dumps(output))
        sys.exit(0)

    subcommand = args[0]
    if subcommand == "explain":
        if len(args) < 2:
            print("Usage: rtk-hook explain <command>", file=sys.stderr)
            sys.exit(1)
        print(explain(" ".join(args[1:]), load_config()))
    elif subcommand == "gain":
        print(gain(args[1] if len(args) > 1 else None))
    elif subcommand == "status":
        print(status())
    elif subcommand in ("help", "-h", "--help"):
        print(USAGE, end="")
    else:
        print(f"Unknown command: {subcommand}", file=sys.stderr)
        print("Run `rtk-hook help` for usage information.", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
