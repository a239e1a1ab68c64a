"""
Built-in command sets for rtk-hook - what gets wrapped when no config says otherwise.
"""

from __future__ import annotations

# === Default Patterns ===
# Word-boundary prefixes: "ls" covers "ls -la" but not "lsof".

DEFAULT_PATTERNS = (
    # === Version Control ===
    "git status",
    "git diff",
    "git log",
    "gh",  # GitHub CLI
    # === Files & Search ===
    "ls",
    "cat",
    "rg",
    "grep",
    "find",
    # === Build & Test ===
    "cargo",
    "pytest",
    "go test",
    "go build",
    "go vet",
    "vitest",
    "npm test",
    # === Lint & Typecheck ===
    "eslint",
    "tsc",
    "ruff",
    "golangci-lint",
    "prettier",
    # === Containers & Clusters ===
    "docker",
    "kubectl",
    # === Packages & Network ===
    "pip",
    "curl",
)


# === Default Aliases ===
# Commands whose rtk equivalent has a different name.

DEFAULT_ALIASES = {
    "cat": "rtk read",
    "rg": "rtk grep",
    "eslint": "rtk lint",
}
