"""rtk-hook configuration: loading, validation and decision logging."""

import json
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any

import structlog

from rtk_hook.core.allowlists import DEFAULT_ALIASES, DEFAULT_PATTERNS

STATE_DIR = Path.home() / ".rtk-hook"
USER_CONFIG = STATE_DIR / "config.json"
ENV_CONFIG = "RTK_HOOK_CONFIG"


@dataclass(frozen=True)
class Config:
    """Parsed configuration.

    A snapshot: the engine only reads it, reloading builds a new one. The
    alias table is stored read-only and left out of the hash.
    """

    enabled: bool = True

    patterns: tuple[str, ...] = DEFAULT_PATTERNS
    """Word-boundary prefixes of commands to wrap."""

    aliases: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES), hash=False)
    """Head token -> replacement, e.g. "cat" -> "rtk read"."""

    auto_approve: bool = False  # answer rewrites with "allow" instead of "ask"
    log: Path | None = None  # None = no logging
    log_full: bool = False  # log full command text (requires log path)

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))


# === Config Loading ===


def config_path() -> Path:
    """Return $RTK_HOOK_CONFIG if set, else ~/.rtk-hook/config.json."""
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        return Path(env_path).expanduser()
    return USER_CONFIG


def load_config(path: Path | None = None) -> Config:
    """Load config from path (default: config_path()). Never raises.

    A missing file means defaults. An unreadable or malformed file also means
    defaults, with a warning on stderr.
    """
    if path is None:
        path = config_path()
    if not path.is_file():
        return Config()
    try:
        return parse_config(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Warning: Failed to load {path}: {e}", file=sys.stderr)
        return Config()


def parse_config(text: str) -> Config:
    """Parse JSON config text into a Config.

    Raises ValueError if the text is not a JSON object. Anything wrong inside
    the object is recovered per field: a field of the wrong type keeps its
    default, invalid list or map entries are dropped.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from None
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    defaults = Config()
    return Config(
        enabled=_bool_setting(data, "enabled", defaults.enabled),
        patterns=_parse_patterns(data.get("patterns"), defaults.patterns),
        aliases=_parse_aliases(data.get("aliases"), defaults.aliases),
        auto_approve=_bool_setting(data, "auto_approve", defaults.auto_approve),
        log=_path_setting(data.get("log")),
        log_full=_bool_setting(data, "log_full", defaults.log_full),
    )


def _bool_setting(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _path_setting(value: Any) -> Path | None:
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return None


def _parse_patterns(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    """Trim, drop blank and non-string entries, de-duplicate in order."""
    if not isinstance(value, list):
        return default
    patterns: list[str] = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        entry = entry.strip()
        if entry and entry not in patterns:
            patterns.append(entry)
    return tuple(patterns)


def _parse_aliases(value: Any, default: Mapping[str, str]) -> Mapping[str, str]:
    """Keep entries whose key is a single token and whose value is a string."""
    if not isinstance(value, dict):
        return default
    aliases: dict[str, str] = {}
    for key, replacement in value.items():
        if not isinstance(replacement, str) or not replacement.strip():
            continue
        if not key or len(key.split()) != 1 or key.strip() != key:
            continue
        aliases[key] = replacement.strip()
    return aliases


# === Logging ===

_logger: Any = None
_log_file: IO[str] | None = None
_log_full: bool = False


def configure_logging(config: Config) -> None:
    """Configure logging based on config settings. Call once at startup."""
    global _logger, _log_file, _log_full
    if _log_file is not None:
        _log_file.close()
    _logger = None
    _log_file = None
    _log_full = config.log_full
    if config.log is None:
        return

    try:
        config.log.parent.mkdir(parents=True, exist_ok=True)
        _log_file = open(config.log, "a", encoding="utf-8")
    except OSError as e:
        print(f"Warning: logging disabled, cannot open {config.log}: {e}", file=sys.stderr)
        return

    # JSON lines, one per decision
    _logger = structlog.wrap_logger(
        structlog.WriteLogger(_log_file),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
    )


def log_decision(
    decision: str,
    cmd: str,
    reason: str | None = None,
    pattern: str | None = None,
    rewritten: str | None = None,
    command: str | None = None,
) -> None:
    """Log a decision. No-op if logging not configured."""
    if _logger is None:
        return

    entry: dict[str, str] = {"cmd": cmd}
    if reason is not None:
        entry["reason"] = reason
    if pattern is not None:
        entry["pattern"] = pattern
    if _log_full:
        if command is not None:
            entry["command"] = command
        if rewritten is not None:
            entry["rewritten"] = rewritten
    _logger.info(decision, **entry)
