"""GitHub issue and comment tools."""

from __future__ import annotations

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ..base import make_tool
from .client import GitHubClient

REPO_PATTERN = r"^[^/\s]+/[^/\s]+$"


class CreateIssueInput(BaseModel):
    repo: str = Field(pattern=REPO_PATTERN, description='Repository in "owner/repo" format, e.g., "facebook/react"')
    title: str = Field(min_length=1, max_length=200, description="Clear, concise issue title")
    body: str | None = Field(default=None, description="Detailed description with context, steps, etc.")
    labels: list[str] | None = Field(default=None, description='Labels like ["bug", "enhancement"]')
    assignees: list[str] | None = Field(default=None, description="GitHub usernames to assign")


class CreateCommentInput(BaseModel):
    repo: str = Field(pattern=REPO_PATTERN, description='Repository in "owner/repo" format')
    pr_number: int = Field(ge=1, description="Pull request number")
    body: str = Field(min_length=1, description="Comment body")
    path: str | None = Field(default=None, description="File path for inline comment")
    line: int | None = Field(default=None, ge=1, description="Line number for inline comment")


def create_issue_tool(client: GitHubClient) -> StructuredTool:
    async def create_issue(
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> dict:
        return await client.create_issue(repo, title, body, labels, assignees)

    return make_tool(
        "github_create_issue",
        "Create a new GitHub issue in a repository. "
        "Use this to report bugs, request features, or track tasks.",
        CreateIssueInput,
        create_issue,
    )


def create_comment_tool(client: GitHubClient) -> StructuredTool:
    async def create_comment(
        repo: str,
        pr_number: int,
        body: str,
        path: str | None = None,
        line: int | None = None,
    ) -> dict:
        return await client.create_comment(repo, pr_number, body, path, line)

    return make_tool(
        "github_create_comment",
        "Create a review comment on a pull request.",
        CreateCommentInput,
        create_comment,
    )
