from __future__ import annotations

from typing import Literal

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ...logger import StructuredLogger
from ..base import make_tool

SAMPLE_CONTENT = "// Example file content\nexport function example() {\n  return 'hello';\n}"


class ReadFileInput(BaseModel):
    path: str = Field(min_length=1, description="File path")
    encoding: Literal["utf-8", "base64"] = "utf-8"


def read_file_tool(logger: StructuredLogger) -> StructuredTool:
    async def read_file(path: str, encoding: str = "utf-8") -> dict:
        # Mocked: every path reads the same sample file.
        logger.debug("Reading file", path=path, encoding=encoding)
        return {
            "path": path,
            "content": SAMPLE_CONTENT,
            "encoding": encoding,
            "size": len(SAMPLE_CONTENT),
            "lines": SAMPLE_CONTENT.count("\n") + 1,
        }

    return make_tool(
        "files_read",
        "Read file content from repository or filesystem.",
        ReadFileInput,
        read_file,
    )
