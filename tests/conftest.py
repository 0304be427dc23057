"""Shared test fixtures."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

import scopegen.config

_FAKE_TOOL = """\
#!/bin/sh
printf '%s\\n' "$@" > tool-args.txt
exit {status}
"""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's environment and global config out of every test."""
    for var in ("CSCOPE", "SCOPEGEN_SUFFIXES", "SCOPEGEN_LIST_FILE", "SCOPEGEN_FALLBACK"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        scopegen.config, "_GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.toml"
    )


def _make_tool(directory: Path, name: str = "cscope", status: int = 0) -> Path:
    """Write an executable shell script that records its arguments."""
    directory.mkdir(parents=True, exist_ok=True)
    tool = directory / name
    tool.write_text(_FAKE_TOOL.format(status=status), encoding="utf-8")
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return tool


@pytest.fixture
def empty_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point PATH at an empty directory so nothing resolves by name."""
    bin_dir = tmp_path / "empty-bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small tree with C sources, headers and non-matching files."""
    root = tmp_path / "src-tree"
    (root / "lib" / "inner").mkdir(parents=True)
    (root / "a.c").write_text("int a;\n", encoding="utf-8")
    (root / "b.hpp").write_text("struct B {};\n", encoding="utf-8")
    (root / "c.txt").write_text("notes\n", encoding="utf-8")
    (root / "lib" / "util.h").write_text("int util(void);\n", encoding="utf-8")
    (root / "lib" / "inner" / "deep.cpp").write_text("int deep() { return 0; }\n", encoding="utf-8")
    (root / "lib" / "UPPER.C").write_text("int upper;\n", encoding="utf-8")
    return root


@pytest.fixture
def make_tool():
    """Factory for fake indexing tools: make_tool(directory, name="cscope", status=0)."""
    return _make_tool
