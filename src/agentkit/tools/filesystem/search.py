from __future__ import annotations

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ...logger import StructuredLogger
from ..base import make_tool

SAMPLE_MATCHES = [
    {"path": "src/index.ts", "matches": 2, "lines": [10, 25]},
    {"path": "src/utils.ts", "matches": 1, "lines": [5]},
]


class SearchFilesInput(BaseModel):
    pattern: str = Field(min_length=1, description="Search pattern or regex")
    directory: str = Field(default=".", description="Directory to search in")
    file_type: str | None = Field(default=None, description='File extension filter, e.g., "ts"')


def search_files_tool(logger: StructuredLogger) -> StructuredTool:
    async def search_files(pattern: str, directory: str = ".", file_type: str | None = None) -> dict:
        logger.debug(
            "Searching files",
            pattern=pattern,
            directory=directory,
            file_type=file_type,
        )
        results = [dict(m) for m in SAMPLE_MATCHES]
        if file_type:
            suffix = "." + file_type.lstrip(".")
            results = [m for m in results if m["path"].endswith(suffix)]
        return {
            "results": results,
            "total_matches": sum(m["matches"] for m in results),
            "total_files": len(results),
        }

    return make_tool(
        "files_search",
        "Search for files matching a pattern.",
        SearchFilesInput,
        search_files,
    )
