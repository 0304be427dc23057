"""Configuration management for scopegen.

Settings are loaded from three sources in order of priority:
1. Environment variables (highest priority)
2. Project-level config: .scopegen.toml
3. Global config: ~/.config/scopegen/config.toml (lowest priority)

Command-line flags are applied on top by the CLI.
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

from scopegen.exceptions import ConfigError

console = Console(stderr=True)

_GLOBAL_CONFIG_DIR = Path.home() / ".config" / "scopegen"
_GLOBAL_CONFIG_PATH = _GLOBAL_CONFIG_DIR / "config.toml"
_PROJECT_CONFIG_NAME = ".scopegen.toml"

OVERRIDE_ENV_VAR = "CSCOPE"

DEFAULT_SUFFIXES: tuple[str, ...] = (
    ".c",
    ".h",
    ".cc",
    ".cpp",
    ".cxx",
    ".hh",
    ".hpp",
    ".hxx",
)

# build only, inverted index, no /usr/include
DEFAULT_TOOL_FLAGS: tuple[str, ...] = ("-b", "-q", "-k")


@dataclass
class ScopeConfig:
    """scopegen configuration.

    Attributes:
        root: Directory to scan for source files.
        suffixes: File-name suffixes to collect (case-sensitive).
        list_file: Where the list of collected paths is written.
        tool_override: Explicit executable path or name; empty = not set.
        tool_name: Name looked up on the search path.
        fallback_path: Last-resort executable location.
        tool_flags: Flags passed to the tool ahead of ``-i <list_file>``.
        verbose: Print resolution and command details.
        workdir: Directory the tool runs in; its database files land here.
    """

    root: Path = field(default_factory=Path.cwd)
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES
    list_file: Path = field(default_factory=lambda: Path("cscope.files"))
    tool_override: str = ""
    tool_name: str = "cscope"
    fallback_path: Path = field(default_factory=lambda: Path("/usr/local/bin/cscope"))
    tool_flags: tuple[str, ...] = DEFAULT_TOOL_FLAGS
    verbose: bool = False
    workdir: Path = field(default_factory=Path.cwd)


def load_config(project_dir: Path) -> ScopeConfig:
    """Load configuration from env vars, project config, and global config.

    Priority: env vars > .scopegen.toml > ~/.config/scopegen/config.toml

    Relative ``list_file`` values are anchored at project_dir.

    Args:
        project_dir: Directory scopegen runs in; also the default scan root.

    Returns:
        A fully resolved ScopeConfig instance.

    Raises:
        ConfigError: If a setting has an unusable value.
    """
    config = ScopeConfig(root=project_dir, workdir=project_dir)

    # Layer 1: Global config (lowest priority)
    _apply_toml(config, _load_toml(_GLOBAL_CONFIG_PATH))

    # Layer 2: Project config
    _apply_toml(config, _load_toml(project_dir / _PROJECT_CONFIG_NAME))

    # Layer 3: Environment variables (highest priority)
    _apply_env(config)

    if not config.list_file.is_absolute():
        config.list_file = project_dir / config.list_file

    return config


def parse_suffixes(value: Any) -> tuple[str, ...]:
    """Normalize a suffix setting into a tuple of dotted suffixes.

    Accepts a comma/whitespace separated string or a list of strings.
    A missing leading dot is added (``"c"`` becomes ``".c"``). Order is
    kept and duplicates are dropped.

    Raises:
        ConfigError: If value is neither a string nor a list of strings.
    """
    if isinstance(value, str):
        items = re.split(r"[,\s]+", value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        items = value
    else:
        raise ConfigError(f"suffixes must be a string or a list of strings, got {value!r}")

    result: list[str] = []
    for item in items:
        item = item.strip()
        if not item:
            continue
        if not item.startswith("."):
            item = "." + item
        if item not in result:
            result.append(item)

    if not result:
        raise ConfigError("suffixes must name at least one file suffix")
    return tuple(result)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file, returning an empty dict if missing or invalid."""
    if not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not parse {path}: {exc}")
        return {}


def _apply_toml(config: ScopeConfig, settings: dict[str, Any]) -> None:
    """Merge TOML settings into a ScopeConfig."""
    if "suffixes" in settings:
        config.suffixes = parse_suffixes(settings["suffixes"])
    if "list_file" in settings:
        config.list_file = Path(str(settings["list_file"])).expanduser()
    if "tool" in settings:
        config.tool_override = str(settings["tool"])
    if "tool_name" in settings:
        config.tool_name = str(settings["tool_name"])
    if "fallback_path" in settings:
        config.fallback_path = Path(str(settings["fallback_path"])).expanduser()
    if "verbose" in settings:
        if not isinstance(settings["verbose"], bool):
            raise ConfigError(f"verbose must be true or false, got {settings['verbose']!r}")
        config.verbose = settings["verbose"]


def _apply_env(config: ScopeConfig) -> None:
    """Override config with environment variables where set."""
    if tool := os.environ.get(OVERRIDE_ENV_VAR):
        config.tool_override = tool
    if suffixes := os.environ.get("SCOPEGEN_SUFFIXES"):
        config.suffixes = parse_suffixes(suffixes)
    if list_file := os.environ.get("SCOPEGEN_LIST_FILE"):
        config.list_file = Path(list_file).expanduser()
    if fallback := os.environ.get("SCOPEGEN_FALLBACK"):
        config.fallback_path = Path(fallback).expanduser()
