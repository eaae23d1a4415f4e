"""Standardized CLI exit codes and exceptions for bvgraph.

Exit code scheme:

    0  SUCCESS           -- analysis completed
    1  GENERAL_ERROR     -- unexpected failure
    2  USAGE_ERROR       -- invalid arguments or config (Click default)
    3  SNAPSHOT_INVALID  -- snapshot / issue file could not be parsed
    4  NODE_NOT_FOUND    -- a key given on the command line is not in the graph
    6  PARTIAL           -- completed with truncated results (cycle cap hit)

The exceptions double as library errors: ``SnapshotError`` and
``ConfigError`` are also ``ValueError`` subclasses, so callers that never
touch the CLI can catch them without importing click.
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_SNAPSHOT_INVALID: int = 3
EXIT_NODE_NOT_FOUND: int = 4
EXIT_PARTIAL: int = 6

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments, flags or config)",
    EXIT_SNAPSHOT_INVALID: "graph snapshot could not be parsed",
    EXIT_NODE_NOT_FOUND: "node key not present in the graph",
    EXIT_PARTIAL: "partial results (enumeration truncated)",
}

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class BvGraphError(click.ClickException):
    """Base class for bvgraph errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class SnapshotError(BvGraphError, ValueError):
    """Raised when snapshot or issue data is structurally malformed."""

    def __init__(self, message: str = "Malformed graph snapshot."):
        super().__init__(message, EXIT_SNAPSHOT_INVALID)


class ConfigError(BvGraphError, ValueError):
    """Raised when a .bvgraph.json config file is invalid."""

    def __init__(self, message: str = "Invalid configuration."):
        super().__init__(message, EXIT_USAGE)


class NodeNotFoundError(BvGraphError):
    """Raised by the CLI when a node key cannot be resolved."""

    def __init__(self, key: str):
        super().__init__(f"Node not found: {key}", EXIT_NODE_NOT_FOUND)
        self.key = key

