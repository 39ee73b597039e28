"""
Tool construction and invocation.

Tools are LangChain StructuredTools: a description, a pydantic args schema
and an async coroutine. run_tool() validates input against the schema first,
so a bad call fails with ToolInputError before the tool body runs.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, ValidationError

from ..errors import ToolInputError


def make_tool(
    name: str,
    description: str,
    args_schema: type[BaseModel],
    coroutine: Callable[..., Awaitable[Any]],
) -> StructuredTool:
    return StructuredTool.from_function(
        coroutine=coroutine,
        name=name,
        description=description,
        args_schema=args_schema,
        infer_schema=False,
    )


def validate_input(
    tool: BaseTool, args: dict[str, Any], tool_name: str | None = None
) -> dict[str, Any]:
    """
    Validate args against the tool's schema and fill in defaults.

    tool_name is reported in ToolInputError; pass the registry key
    (e.g. "github:create_issue") so it matches the name other tool errors
    carry. Defaults to the LangChain tool name.
    """
    schema = tool.args_schema
    if schema is None or not isinstance(schema, type):
        return dict(args)
    try:
        parsed = schema.model_validate(args)
    except ValidationError as e:
        raise ToolInputError(tool_name or tool.name, e.errors(include_url=False)) from e
    return parsed.model_dump()


async def run_tool(
    tool: BaseTool, args: dict[str, Any] | None = None, tool_name: str | None = None
) -> Any:
    validated = validate_input(tool, args or {}, tool_name)
    return await tool.ainvoke(validated)


def describe_tool(tool: BaseTool) -> str:
    """Prompt-ready description of a tool and its parameters."""
    schema = tool.args_schema.model_json_schema() if tool.args_schema else {}
    params = schema.get("properties", {})
    required = set(schema.get("required", []))
    lines = [f"## Tool: {tool.name}", tool.description, ""]
    if params:
        lines.append("Parameters:")
        for pname, pinfo in params.items():
            ptype = pinfo.get("type", "any")
            pdesc = pinfo.get("description", "")
            flag = "" if pname in required else ", optional"
            lines.append(f"  - {pname} ({ptype}{flag}): {pdesc}".rstrip(": "))
    return "\n".join(lines)
