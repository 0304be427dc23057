"""Source collection and cscope invocation."""

from __future__ import annotations

from scopegen.indexer.collector import CollectResult, FileCollector, read_file_list
from scopegen.indexer.invoker import IndexerInvoker, InvokeResult, ResolvedTool, ToolResolver

__all__ = [
    "CollectResult",
    "FileCollector",
    "IndexerInvoker",
    "InvokeResult",
    "ResolvedTool",
    "ToolResolver",
    "read_file_list",
]
