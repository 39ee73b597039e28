from __future__ import annotations

import base64
import binascii
from typing import Literal

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ...errors import ToolError
from ...logger import StructuredLogger
from ..base import make_tool


class WriteFileInput(BaseModel):
    path: str = Field(min_length=1, description="File path")
    content: str = Field(description="File content")
    encoding: Literal["utf-8", "base64"] = "utf-8"


def write_file_tool(logger: StructuredLogger) -> StructuredTool:
    async def write_file(path: str, content: str, encoding: str = "utf-8") -> dict:
        if encoding == "base64":
            try:
                size = len(base64.b64decode(content, validate=True))
            except binascii.Error as e:
                raise ToolError(f"Content is not valid base64: {e}", "files:write")
        else:
            size = len(content.encode("utf-8"))

        # Mocked: nothing is written to disk.
        logger.info(f"Writing to {path}", path=path, bytes=size)
        return {"path": path, "bytes_written": size, "success": True}

    return make_tool(
        "files_write",
        "Write content to a file.",
        WriteFileInput,
        write_file,
    )
