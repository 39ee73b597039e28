from __future__ import annotations

from typing import Any

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ...errors import ToolError
from ...logger import StructuredLogger
from ..base import make_tool

SAMPLE_ROWS = [
    {"id": 1, "name": "api", "status": "healthy"},
    {"id": 2, "name": "worker", "status": "healthy"},
    {"id": 3, "name": "scheduler", "status": "degraded"},
]

READ_ONLY_PREFIXES = ("select", "with", "explain", "show")


class QueryInput(BaseModel):
    sql: str = Field(min_length=1, description="Read-only SQL statement")
    params: dict[str, Any] | None = Field(default=None, description="Bound query parameters")
    limit: int = Field(default=100, ge=1, le=1000, description="Maximum rows to return")


def query_tool(logger: StructuredLogger) -> StructuredTool:
    async def query(sql: str, params: dict[str, Any] | None = None, limit: int = 100) -> dict:
        if not sql.lstrip().lower().startswith(READ_ONLY_PREFIXES):
            raise ToolError("Only read-only statements are allowed", "db:query")

        # Mocked: canned rows regardless of the statement.
        logger.debug("Running query", sql=sql, params=params, limit=limit)
        rows = [dict(r) for r in SAMPLE_ROWS[:limit]]
        return {"rows": rows, "row_count": len(rows)}

    return make_tool(
        "db_query",
        "Run a read-only SQL query against the application database.",
        QueryInput,
        query,
    )
