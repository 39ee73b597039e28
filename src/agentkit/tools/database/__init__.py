"""Database tools (mocked)."""

from __future__ import annotations

from ...logger import StructuredLogger, default_logger
from ...registry import ToolRegistry

_PACKAGE = "agentkit.tools.database"

DATABASE_TOOLS = {
    "db:query": "query:query_tool",
    "db:migrate": "migrate:migrate_tool",
}


def database_tools(logger: StructuredLogger | None = None, cache: bool = True) -> ToolRegistry:
    logger = logger or default_logger()
    registry = ToolRegistry("database", cache=cache)
    for key, target in DATABASE_TOOLS.items():
        registry.register_lazy(key, f"{_PACKAGE}.{target}", logger)
    return registry


__all__ = ["DATABASE_TOOLS", "database_tools"]
