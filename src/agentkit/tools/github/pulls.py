"""GitHub pull request tools."""

from __future__ import annotations

from typing import Literal

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ..base import make_tool
from .client import GitHubClient
from .issues import REPO_PATTERN


class GetPRInput(BaseModel):
    repo: str = Field(pattern=REPO_PATTERN, description='Repository in "owner/repo" format')
    pr_number: int = Field(ge=1, description="Pull request number")


class ListPRsInput(BaseModel):
    repo: str = Field(pattern=REPO_PATTERN, description='Repository in "owner/repo" format')
    state: Literal["open", "closed", "all"] = "open"
    limit: int = Field(default=30, ge=1, le=100, description="Maximum number of pull requests")


class MergePRInput(BaseModel):
    repo: str = Field(pattern=REPO_PATTERN, description='Repository in "owner/repo" format')
    pr_number: int = Field(ge=1, description="Pull request number")
    merge_method: Literal["merge", "squash", "rebase"] = "merge"


def get_pr_tool(client: GitHubClient) -> StructuredTool:
    async def get_pr(repo: str, pr_number: int) -> dict:
        return await client.get_pull(repo, pr_number)

    return make_tool(
        "github_get_pr",
        "Fetch detailed information about a pull request, including changed files.",
        GetPRInput,
        get_pr,
    )


def list_prs_tool(client: GitHubClient) -> StructuredTool:
    async def list_prs(repo: str, state: str = "open", limit: int = 30) -> dict:
        return await client.list_pulls(repo, state, limit)

    return make_tool(
        "github_list_prs",
        "List pull requests in a repository.",
        ListPRsInput,
        list_prs,
    )


def merge_pr_tool(client: GitHubClient) -> StructuredTool:
    async def merge_pr(repo: str, pr_number: int, merge_method: str = "merge") -> dict:
        return await client.merge_pull(repo, pr_number, merge_method)

    return make_tool(
        "github_merge_pr",
        "Merge a pull request.",
        MergePRInput,
        merge_pr,
    )
