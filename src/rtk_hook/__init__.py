"""
rtk-hook - Run simple Claude Code shell commands through rtk.

Rewrites eligible commands to their rtk equivalent so the output Claude reads
is compressed.
"""

from __future__ import annotations

__version__ = "0.1.0"

from rtk_hook.core.config import Config
from rtk_hook.core.decision import Decision, decide

__all__ = ["Config", "Decision", "decide", "__version__"]
