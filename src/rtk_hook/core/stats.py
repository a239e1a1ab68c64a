"""
Rewrite tallies for the gain report.

The engine never touches these. The hook records a rewrite after decide()
returns one, either into an in-memory RewriteCounter or into the per-session
file behind SessionStats.
"""

from __future__ import annotations

import json
import re
import threading
from datetime import datetime, timezone
from pathlib import Path

from rtk_hook.core.config import STATE_DIR

SESSIONS_DIR = STATE_DIR / "sessions"


def stats_key(command: str) -> str:
    """Tally key: first two words of the command ("git status", "ls")."""
    return " ".join(command.split()[:2])


class RewriteCounter:
    """Thread-safe tally of rewrites keyed by command."""

    def __init__(self, started_at: datetime | None = None) -> None:
        self.started_at = started_at or datetime.now(timezone.utc)
        self._lock = threading.Lock()
        self._commands: dict[str, int] = {}
        self._total = 0

    def record(self, command: str) -> None:
        key = stats_key(command)
        if not key:
            return
        with self._lock:
            self._total += 1
            self._commands[key] = self._commands.get(key, 0) + 1

    @property
    def total(self) -> int:
        with self._lock:
            return self._total

    @property
    def commands(self) -> dict[str, int]:
        """Copy of the tally, in first-seen order."""
        with self._lock:
            return dict(self._commands)


def _safe_session_id(session_id: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]", "_", session_id) or "unknown"


def _parse_ts(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        ts = datetime.fromisoformat(value)
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class SessionStats:
    """Rewrite log for one session, one JSON line per rewrite.

    Lines are appended, so several hook processes in the same session can
    record without clobbering each other.
    """

    def __init__(self, session_id: str, directory: Path | None = None) -> None:
        self.session_id = _safe_session_id(session_id)
        self.path = (directory or SESSIONS_DIR) / f"{self.session_id}.jsonl"

    def record(self, command: str, now: datetime | None = None) -> None:
        key = stats_key(command)
        if not key:
            return
        now = now or datetime.now(timezone.utc)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps({"ts": now.isoformat(), "key": key}) + "\n")

    def load(self) -> RewriteCounter:
        """Rebuild the tally from disk. Malformed lines are skipped."""
        entries: list[tuple[datetime, str]] = []
        if self.path.is_file():
            for line in self.path.read_text(encoding="utf-8").splitlines():
                try:
                    data = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if not isinstance(data, dict):
                    continue
                ts = _parse_ts(data.get("ts"))
                key = data.get("key")
                if ts is None or not isinstance(key, str) or not key.strip():
                    continue
                entries.append((ts, key))

        counter = RewriteCounter(entries[0][0] if entries else None)
        for _, key in entries:
            counter.record(key)
        return counter


def latest_session(directory: Path | None = None) -> SessionStats | None:
    """Return the most recently written session, or None if there are none."""
    directory = directory or SESSIONS_DIR
    if not directory.is_dir():
        return None
    candidates: list[tuple[float, Path]] = []
    for path in directory.glob("*.jsonl"):
        try:
            candidates.append((path.stat().st_mtime, path))
        except FileNotFoundError:
            # Deleted since the glob
            continue
    if not candidates:
        return None
    _, newest = max(candidates)
    return SessionStats(newest.stem, directory)


def format_stats(counter: RewriteCounter, now: datetime | None = None) -> str:
    """Render the gain report for a tally."""
    now = now or datetime.now(timezone.utc)
    minutes = max(int((now - counter.started_at).total_seconds() // 60), 0)
    hours = minutes // 60
    duration = f"{hours}h {minutes % 60}m" if hours > 0 else f"{minutes}m"
    header = f"RTK Session Stats ({duration})"

    if counter.total == 0:
        return f"{header}\nNo commands rewritten yet."

    # Most rewritten first; ties keep first-seen order
    rows = sorted(counter.commands.items(), key=lambda item: item[1], reverse=True)
    width = max(len(cmd) for cmd, _ in rows)
    lines = [
        f"  {cmd.ljust(width)}  - {count} rewrite{'s' if count != 1 else ''}"
        for cmd, count in rows
    ]
    return "\n".join([header, f"Total rewrites: {counter.total}", "", *lines])
