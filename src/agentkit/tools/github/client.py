"""
GitHub API client.

All GitHub tools go through GitHubClient, which sends requests with
http_fetch(). By default the underlying httpx client is wired to
MockGitHubTransport, an in-process stand-in for api.github.com that serves
canned responses, so nothing leaves the process.
"""

from __future__ import annotations

import json
import re
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable

import httpx

from ...errors import AppError, RateLimitError
from ...http import DEFAULT_TIMEOUT_MS, http_fetch
from ...logger import StructuredLogger, default_logger

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_RETRY_AFTER_MS = 60000
DEFAULT_REQUEST_HISTORY = 100

MOCK_ISSUE_NUMBER = 12345
MOCK_COMMENT_ID = 123456
MOCK_MERGE_SHA = "abc123"


def split_repo(repo: str) -> tuple[str, str]:
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise ValueError(f"Repository must be in 'owner/repo' format, got {repo!r}")
    return owner, name


# ── Mock transport ───────────────────────────────────────────

Route = tuple[str, re.Pattern, Callable[..., httpx.Response]]


class MockGitHubTransport(httpx.MockTransport):
    """
    Canned GitHub REST API.

    rate_limit: number of requests served before every further request is
    answered with 429 (None = unlimited).
    history: how many recent requests are kept in .requests for inspection.
    """

    def __init__(
        self,
        rate_limit: int | None = None,
        retry_after_s: int = 60,
        history: int = DEFAULT_REQUEST_HISTORY,
    ):
        self.rate_limit = rate_limit
        self.retry_after_s = retry_after_s
        self.request_count = 0
        self.requests: deque[httpx.Request] = deque(maxlen=history)
        self._routes: list[Route] = [
            ("POST", re.compile(r"/repos/([^/]+)/([^/]+)/issues$"), self._create_issue),
            ("POST", re.compile(r"/repos/([^/]+)/([^/]+)/issues/(\d+)/comments$"), self._create_comment),
            ("GET", re.compile(r"/repos/([^/]+)/([^/]+)/pulls/(\d+)/files$"), self._pull_files),
            ("PUT", re.compile(r"/repos/([^/]+)/([^/]+)/pulls/(\d+)/merge$"), self._merge_pull),
            ("GET", re.compile(r"/repos/([^/]+)/([^/]+)/pulls/(\d+)$"), self._get_pull),
            ("GET", re.compile(r"/repos/([^/]+)/([^/]+)/pulls$"), self._list_pulls),
            ("GET", re.compile(r"/users/([^/]+)/repos$"), self._list_repos),
            ("GET", re.compile(r"/repos/([^/]+)/([^/]+)$"), self._get_repo),
        ]
        super().__init__(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.request_count += 1
        self.requests.append(request)

        if self.rate_limit is not None and self.request_count > self.rate_limit:
            return httpx.Response(
                429,
                headers={"Retry-After": str(self.retry_after_s)},
                json={"message": "API rate limit exceeded"},
            )

        for method, pattern, handler in self._routes:
            if request.method != method:
                continue
            match = pattern.search(request.url.path)
            if match:
                return handler(request, *match.groups())

        return httpx.Response(404, json={"message": "Not Found"})

    @staticmethod
    def _payload(request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content) if request.content else {}

    def _create_issue(self, request, owner, repo):
        payload = self._payload(request)
        return httpx.Response(201, json={
            "number": MOCK_ISSUE_NUMBER,
            "html_url": f"https://github.com/{owner}/{repo}/issues/{MOCK_ISSUE_NUMBER}",
            "title": payload.get("title"),
            "body": payload.get("body"),
            "labels": [{"name": name} for name in payload.get("labels") or []],
            "assignees": [{"login": login} for login in payload.get("assignees") or []],
            "state": "open",
            "created_at": datetime.now(timezone.utc).isoformat(),
        })

    def _create_comment(self, request, owner, repo, number):
        payload = self._payload(request)
        return httpx.Response(201, json={
            "id": MOCK_COMMENT_ID,
            "body": payload.get("body"),
            "html_url": (
                f"https://github.com/{owner}/{repo}/pull/{number}"
                f"#issuecomment-{MOCK_COMMENT_ID}"
            ),
        })

    def _get_pull(self, request, owner, repo, number):
        return httpx.Response(200, json={
            "number": int(number),
            "title": "Example PR",
            "user": {"login": "developer"},
            "state": "open",
            "additions": 45,
            "deletions": 12,
            "changed_files": 2,
            "html_url": f"https://github.com/{owner}/{repo}/pull/{number}",
        })

    def _pull_files(self, request, owner, repo, number):
        return httpx.Response(200, json=[
            {"filename": "src/index.ts", "additions": 30, "deletions": 8},
            {"filename": "src/utils.ts", "additions": 15, "deletions": 4},
        ])

    def _list_pulls(self, request, owner, repo):
        state = request.url.params.get("state", "open")
        pulls = [
            {"number": 123, "title": "Add new feature", "state": "open"},
            {"number": 122, "title": "Fix bug", "state": "open"},
        ]
        if state == "closed":
            pulls = []
        return httpx.Response(200, json=pulls)

    def _merge_pull(self, request, owner, repo, number):
        method = self._payload(request).get("merge_method", "merge")
        return httpx.Response(200, json={
            "merged": True,
            "sha": MOCK_MERGE_SHA,
            "message": f"Merged PR #{number} using {method}",
        })

    def _list_repos(self, request, owner):
        return httpx.Response(200, json=[
            {"name": "repo1", "full_name": f"{owner}/repo1", "private": False,
             "stargazers_count": 1234, "language": "TypeScript"},
            {"name": "repo2", "full_name": f"{owner}/repo2", "private": False,
             "stargazers_count": 567, "language": "JavaScript"},
        ])

    def _get_repo(self, request, owner, repo):
        return httpx.Response(200, json={
            "name": repo,
            "full_name": f"{owner}/{repo}",
            "description": "Example repository",
            "private": False,
            "stargazers_count": 1234,
            "forks_count": 567,
            "language": "TypeScript",
            "topics": ["typescript", "ai", "agents"],
            "html_url": f"https://github.com/{owner}/{repo}",
        })


# ── Client ───────────────────────────────────────────────────

class GitHubClient:
    """
    Thin GitHub REST client returning tool-shaped dicts.

    Usage:
        client = GitHubClient()                      # mocked API
        pr = await client.get_pull("o/r", 1)
        await client.aclose()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: str | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: StructuredLogger | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_ms = timeout_ms
        self.transport = transport if transport is not None else MockGitHubTransport()
        self.logger = logger or default_logger()
        self._client: httpx.AsyncClient | None = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, transport=self.transport)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        tool_name: str,
        method: str,
        path: str,
        body: Any = None,
    ) -> Any:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await http_fetch(
                f"{self.base_url}{path}",
                method=method,
                headers=headers,
                body=body,
                timeout_ms=self.timeout_ms,
                client=self.http,
            )
        except AppError as e:
            if e.status_code == 429:
                raise RateLimitError(tool_name, DEFAULT_RETRY_AFTER_MS) from e
            raise
        return response.data

    # ── Issues ───────────────────────────────────────────────

    async def create_issue(
        self,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> dict:
        owner, name = split_repo(repo)
        self.logger.info("Creating GitHub issue", repo=repo, title=title)

        payload: dict[str, Any] = {"title": title}
        if body is not None:
            payload["body"] = body
        if labels:
            payload["labels"] = labels
        if assignees:
            payload["assignees"] = assignees

        data = await self._request("github:create_issue", "POST", f"/repos/{owner}/{name}/issues", payload)
        return {
            "issue_number": data["number"],
            "url": data["html_url"],
            "title": data["title"],
            "state": data["state"],
            "created_at": data["created_at"],
        }

    async def create_comment(
        self,
        repo: str,
        pr_number: int,
        body: str,
        path: str | None = None,
        line: int | None = None,
    ) -> dict:
        owner, name = split_repo(repo)
        self.logger.info(
            "Creating PR comment",
            repo=repo,
            pr_number=pr_number,
            path=path,
            line=line,
        )
        data = await self._request(
            "github:create_comment",
            "POST",
            f"/repos/{owner}/{name}/issues/{pr_number}/comments",
            {"body": body},
        )
        return {"comment_id": data["id"], "url": data["html_url"]}

    # ── Pull requests ────────────────────────────────────────

    async def get_pull(self, repo: str, pr_number: int) -> dict:
        owner, name = split_repo(repo)
        base = f"/repos/{owner}/{name}/pulls/{pr_number}"
        pull = await self._request("github:get_pr", "GET", base)
        files = await self._request("github:get_pr", "GET", f"{base}/files")
        return {
            "number": pull["number"],
            "title": pull["title"],
            "author": pull["user"]["login"],
            "state": pull["state"],
            "changed_files": [f["filename"] for f in files],
            "additions": pull["additions"],
            "deletions": pull["deletions"],
            "url": pull["html_url"],
        }

    async def list_pulls(self, repo: str, state: str = "open", limit: int = 30) -> dict:
        owner, name = split_repo(repo)
        pulls = await self._request(
            "github:list_prs", "GET", f"/repos/{owner}/{name}/pulls?state={state}&per_page={limit}"
        )
        pulls = pulls[:limit]
        return {
            "pull_requests": [
                {"number": p["number"], "title": p["title"], "state": p["state"]}
                for p in pulls
            ],
            "total": len(pulls),
        }

    async def merge_pull(self, repo: str, pr_number: int, merge_method: str = "merge") -> dict:
        owner, name = split_repo(repo)
        self.logger.info(
            "Merging pull request",
            repo=repo,
            pr_number=pr_number,
            merge_method=merge_method,
        )
        data = await self._request(
            "github:merge_pr",
            "PUT",
            f"/repos/{owner}/{name}/pulls/{pr_number}/merge",
            {"merge_method": merge_method},
        )
        return {"merged": data["merged"], "sha": data["sha"], "message": data["message"]}

    # ── Repositories ─────────────────────────────────────────

    async def list_repos(self, owner: str, type: str = "all", sort: str = "updated") -> dict:
        repos = await self._request(
            "github:list_repos", "GET", f"/users/{owner}/repos?type={type}&sort={sort}"
        )
        return {
            "repositories": [
                {
                    "name": r["name"],
                    "full_name": r["full_name"],
                    "private": r["private"],
                    "stars": r["stargazers_count"],
                    "language": r["language"],
                }
                for r in repos
            ],
            "total": len(repos),
        }

    async def get_repo(self, repo: str) -> dict:
        owner, name = split_repo(repo)
        data = await self._request("github:get_repo", "GET", f"/repos/{owner}/{name}")
        return {
            "name": data["name"],
            "full_name": data["full_name"],
            "description": data["description"],
            "private": data["private"],
            "stars": data["stargazers_count"],
            "forks": data["forks_count"],
            "language": data["language"],
            "topics": data["topics"],
            "url": data["html_url"],
        }
