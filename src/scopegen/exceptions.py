"""scopegen exception hierarchy.

All exceptions inherit from ScopegenError so the CLI can catch the base
class and report any failure the same way.
"""

from __future__ import annotations


class ScopegenError(Exception):
    """Base exception for all scopegen errors."""


class ConfigError(ScopegenError):
    """Configuration-related errors (malformed suffix list, bad TOML values, etc.)."""


class CollectorError(ScopegenError):
    """Errors while walking the source tree or writing the list file."""


class ToolNotFoundError(ScopegenError):
    """The indexing tool could not be resolved by any lookup strategy."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"{tool_name} not found")
        self.tool_name = tool_name


class InvokerError(ScopegenError):
    """The indexing tool was resolved but could not be started."""
