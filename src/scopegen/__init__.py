"""scopegen: rebuild a cscope cross-reference database for a source tree."""

from __future__ import annotations

__version__ = "0.1.0"
