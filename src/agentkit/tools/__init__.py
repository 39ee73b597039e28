"""
Tool registries by domain.

Each domain package exposes a function returning a ToolRegistry whose
entries are imported on first use:

    github_tools()      github:create_issue, github:get_pr, ...
    filesystem_tools()  files:read, files:write, files:search
    database_tools()    db:query, db:migrate
"""

from .base import describe_tool, make_tool, run_tool, validate_input

__all__ = ["describe_tool", "make_tool", "run_tool", "validate_input"]
