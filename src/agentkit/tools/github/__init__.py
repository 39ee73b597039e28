"""
GitHub tools.

    registry = github_tools()            # mocked GitHub API
    tool = registry.get("github:get_pr")
"""

from __future__ import annotations

from ...registry import ToolRegistry
from .client import GitHubClient, MockGitHubTransport

_PACKAGE = "agentkit.tools.github"

GITHUB_TOOLS = {
    "github:create_issue": "issues:create_issue_tool",
    "github:create_comment": "issues:create_comment_tool",
    "github:get_pr": "pulls:get_pr_tool",
    "github:list_prs": "pulls:list_prs_tool",
    "github:merge_pr": "pulls:merge_pr_tool",
    "github:list_repos": "repos:list_repos_tool",
    "github:get_repo": "repos:get_repo_tool",
}


def github_tools(client: GitHubClient | None = None, cache: bool = True) -> ToolRegistry:
    """Registry of GitHub tools bound to one client (a mocked one by default)."""
    client = client or GitHubClient()
    registry = ToolRegistry("github", cache=cache)
    for key, target in GITHUB_TOOLS.items():
        registry.register_lazy(key, f"{_PACKAGE}.{target}", client)
    return registry


__all__ = ["GITHUB_TOOLS", "GitHubClient", "MockGitHubTransport", "github_tools"]
