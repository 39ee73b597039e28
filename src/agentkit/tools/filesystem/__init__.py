"""Filesystem tools (mocked)."""

from __future__ import annotations

from ...logger import StructuredLogger, default_logger
from ...registry import ToolRegistry

_PACKAGE = "agentkit.tools.filesystem"

FILESYSTEM_TOOLS = {
    "files:read": "read:read_file_tool",
    "files:write": "write:write_file_tool",
    "files:search": "search:search_files_tool",
}


def filesystem_tools(logger: StructuredLogger | None = None, cache: bool = True) -> ToolRegistry:
    logger = logger or default_logger()
    registry = ToolRegistry("filesystem", cache=cache)
    for key, target in FILESYSTEM_TOOLS.items():
        registry.register_lazy(key, f"{_PACKAGE}.{target}", logger)
    return registry


__all__ = ["FILESYSTEM_TOOLS", "filesystem_tools"]
