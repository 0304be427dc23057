"""File collector that walks a source tree and writes the cscope list file."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from scopegen.exceptions import CollectorError

console = Console(stderr=True)


@dataclass(frozen=True, slots=True)
class CollectResult:
    """Outcome of a collection pass.

    Attributes:
        list_file: Path of the list file that was written.
        paths: Absolute paths written to the list file, in order.
    """

    list_file: Path
    paths: list[Path] = field(default_factory=list)


class FileCollector:
    """Finds source files by suffix and writes them to a list file.

    Usage::

        collector = FileCollector(Path("/my/project"), (".c", ".h"))
        result = collector.write(Path("cscope.files"))
    """

    def __init__(self, root: Path, suffixes: Iterable[str]) -> None:
        """Initialize the collector.

        Args:
            root: Directory to walk.
            suffixes: File-name suffixes to match, compared case-sensitively.

        Raises:
            CollectorError: If root does not exist or suffixes is empty.
        """
        self._root = root.resolve()
        if not self._root.is_dir():
            raise CollectorError(f"Source directory does not exist: {self._root}")
        self._suffixes = tuple(suffixes)
        if not self._suffixes:
            raise CollectorError("No file suffixes configured")

    def collect(self) -> list[Path]:
        """Walk the tree and return matching regular files as absolute paths.

        Names are visited in sorted order so repeated runs over an
        unchanged tree produce the same list.
        """
        results: list[Path] = []
        try:
            for dirpath_str, dirnames, filenames in os.walk(self._root, topdown=True):
                dirpath = Path(dirpath_str)
                dirnames.sort()

                for fname in sorted(filenames):
                    if not self.matches(fname):
                        continue
                    full = dirpath / fname
                    if "\n" in fname:
                        console.print(
                            f"[yellow]Warning:[/yellow] skipping {full!r}, newline in file name"
                        )
                        continue
                    if not full.is_file():
                        continue
                    results.append(full)
        except OSError as exc:
            raise CollectorError(f"Failed to scan {self._root}: {exc}") from exc
        return results

    def write(self, list_file: Path) -> CollectResult:
        """Collect files and overwrite list_file with one path per line.

        An empty match set still produces an (empty) list file.

        Raises:
            CollectorError: If the list file cannot be written.
        """
        paths = self.collect()
        text = "".join(f"{p}\n" for p in paths)
        try:
            list_file.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise CollectorError(f"Failed to write {list_file}: {exc}") from exc

        console.print(
            f"[green]Collector[/green] wrote [bold]{len(paths)}[/bold] paths to {list_file}"
        )
        return CollectResult(list_file=list_file, paths=paths)

    def matches(self, filename: str) -> bool:
        """Return True if filename ends with one of the configured suffixes."""
        return filename.endswith(self._suffixes)


def read_file_list(list_file: Path) -> list[Path]:
    """Read an existing list file back into paths, skipping blank lines.

    Raises:
        CollectorError: If the list file is missing or unreadable.
    """
    if not list_file.is_file():
        raise CollectorError(f"List file not found: {list_file}")
    try:
        text = list_file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise CollectorError(f"Failed to read {list_file}: {exc}") from exc
    return [Path(line) for line in text.splitlines() if line.strip()]
