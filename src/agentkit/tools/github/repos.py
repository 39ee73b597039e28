"""GitHub repository tools."""

from __future__ import annotations

from typing import Literal

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ..base import make_tool
from .client import GitHubClient
from .issues import REPO_PATTERN


class ListReposInput(BaseModel):
    owner: str = Field(min_length=1, description="Organization or user name")
    type: Literal["all", "public", "private"] = "all"
    sort: Literal["created", "updated", "pushed", "full_name"] = "updated"


class GetRepoInput(BaseModel):
    repo: str = Field(pattern=REPO_PATTERN, description='Repository in "owner/repo" format')


def list_repos_tool(client: GitHubClient) -> StructuredTool:
    async def list_repos(owner: str, type: str = "all", sort: str = "updated") -> dict:
        return await client.list_repos(owner, type, sort)

    return make_tool(
        "github_list_repos",
        "List repositories for an organization or user.",
        ListReposInput,
        list_repos,
    )


def get_repo_tool(client: GitHubClient) -> StructuredTool:
    async def get_repo(repo: str) -> dict:
        return await client.get_repo(repo)

    return make_tool(
        "github_get_repo",
        "Get detailed information about a repository.",
        GetRepoInput,
        get_repo,
    )
