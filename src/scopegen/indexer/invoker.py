"""Resolve the cscope executable and run it against the list file."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from scopegen.config import OVERRIDE_ENV_VAR, ScopeConfig
from scopegen.exceptions import InvokerError, ToolNotFoundError

console = Console(stderr=True)


@dataclass(frozen=True, slots=True)
class ResolvedTool:
    """An executable found by one of the lookup strategies.

    Attributes:
        path: Path to the executable.
        strategy: Which resolver found it ("override", "search-path", "fallback").
    """

    path: Path
    strategy: str


@dataclass
class InvokeResult:
    """Result of running the indexing tool.

    Attributes:
        command: The full argument vector that was executed.
        returncode: The tool's exit status.
    """

    command: list[str]
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class ToolResolver:
    """Finds the indexing tool by trying each lookup strategy in order.

    Order: explicit override, search-path lookup by name, fixed fallback
    path. The first strategy that yields an executable wins.

    Args:
        config: Supplies the override, tool name and fallback path.
    """

    def __init__(self, config: ScopeConfig) -> None:
        self._config = config

    @property
    def strategies(self) -> list[tuple[str, Callable[[], Path | None]]]:
        return [
            ("override", self._from_override),
            ("search-path", self._from_search_path),
            ("fallback", self._from_fallback),
        ]

    def resolve(self) -> ResolvedTool:
        """Return the first executable any strategy finds.

        Raises:
            ToolNotFoundError: If every strategy comes up empty.
        """
        for name, resolver in self.strategies:
            path = resolver()
            if path is not None:
                return ResolvedTool(path=path, strategy=name)
        raise ToolNotFoundError(self._config.tool_name)

    def _from_override(self) -> Path | None:
        """Use the configured override if it names an executable."""
        override = self._config.tool_override.strip()
        if not override:
            return None

        candidate = Path(override).expanduser()
        if _is_executable(candidate):
            return candidate.absolute()

        # Bare names like CSCOPE=cscope-15 go through PATH
        found = shutil.which(override)
        if found:
            return Path(found)

        console.print(
            f"[yellow]Warning:[/yellow] {OVERRIDE_ENV_VAR}={override} is not an executable, ignoring"
        )
        return None

    def _from_search_path(self) -> Path | None:
        """Look the tool up by name on PATH."""
        found = shutil.which(self._config.tool_name)
        return Path(found) if found else None

    def _from_fallback(self) -> Path | None:
        """Check the fixed fallback location."""
        candidate = self._config.fallback_path
        return candidate if _is_executable(candidate) else None


class IndexerInvoker:
    """Runs the indexing tool over a list file.

    The tool runs in the configured working directory and writes its
    database files there. Their contents are never read back.

    Args:
        config: Resolved configuration.
    """

    def __init__(self, config: ScopeConfig) -> None:
        self._config = config
        self._resolver = ToolResolver(config)

    def build_command(self, tool: Path, list_file: Path) -> list[str]:
        """Assemble the argument vector for a non-interactive database build."""
        return [str(tool), *self._config.tool_flags, "-i", str(list_file)]

    def run(self, list_file: Path | None = None) -> InvokeResult:
        """Resolve the tool and run it.

        Args:
            list_file: List file to pass; defaults to the configured one.

        Returns:
            InvokeResult with the executed command and exit status.

        Raises:
            ToolNotFoundError: If no strategy resolves the tool. Nothing is spawned.
            InvokerError: If the tool cannot be started.
        """
        list_file = list_file or self._config.list_file
        tool = self._resolver.resolve()
        command = self.build_command(tool.path, list_file)

        if self._config.verbose:
            console.print(f"[dim]Resolved {tool.path} via {tool.strategy}[/dim]")
            console.print(f"[dim]Running: {' '.join(command)}[/dim]")

        try:
            completed = subprocess.run(
                command,
                cwd=str(self._config.workdir),
                check=False,
            )
        except OSError as exc:
            raise InvokerError(f"Failed to run {tool.path}: {exc}") from exc

        return InvokeResult(command=command, returncode=completed.returncode)
