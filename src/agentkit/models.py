"""
Data models for agentkit.

Enums, dataclasses, and typed payloads used across the system.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping

from .errors import InvalidPayloadError


# ── Enums ────────────────────────────────────────────────────

class TaskType(str, Enum):
    CODE_REVIEW = "code-review"
    DEPLOYMENT = "deployment"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReviewStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    PENDING = "pending"


# ── Tasks ────────────────────────────────────────────────────

@dataclass
class Task:
    """
    A unit of work submitted to the orchestrator.

    type is kept as a plain string so unknown types reach the orchestrator
    and are rejected there with UNKNOWN_TASK_TYPE.
    """
    type: str
    data: dict[str, Any] = field(default_factory=dict)
    user_id: str | None = None
    priority: Priority | None = None

    def __post_init__(self):
        if isinstance(self.type, TaskType):
            self.type = self.type.value
        if self.priority is not None and not isinstance(self.priority, Priority):
            self.priority = Priority(self.priority)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        """Create a Task from its wire shape ({type, data, userId?, priority?})."""
        if "type" not in data:
            raise ValueError("Task requires a 'type' field")
        payload = data.get("data") or {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"Task data must be a mapping, got {type(payload).__name__}")

        return cls(
            type=str(data["type"]),
            data=dict(payload),
            user_id=data.get("user_id", data.get("userId")),
            priority=data.get("priority"),
        )


@dataclass(frozen=True)
class TaskResult:
    """
    The envelope returned for every task, successful or not.

    to_dict() writes the elapsed milliseconds under both duration_ms and
    duration, the key envelope consumers outside Python read.
    """
    success: bool
    duration_ms: int
    data: Any = None
    error: str | None = None
    error_code: str | None = None
    status_code: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.success:
            result["data"] = self.data
        else:
            result["error"] = self.error
            if self.error_code is not None:
                result["error_code"] = self.error_code
            if self.status_code is not None:
                result["status_code"] = self.status_code
        result["duration_ms"] = self.duration_ms
        result["duration"] = self.duration_ms
        return result


# ── Agent payloads ───────────────────────────────────────────

PR_URL_PATTERN = re.compile(r"github\.com/([^/]+/[^/]+)/pull/(\d+)")


@dataclass(frozen=True)
class CodeReviewRequest:
    pr_url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CodeReviewRequest:
        pr_url = data.get("pr_url", data.get("prUrl"))
        if not pr_url or not isinstance(pr_url, str):
            raise InvalidPayloadError("pr_url is required and must be a string")
        return cls(pr_url=pr_url)

    def parse(self) -> tuple[str, int]:
        """Return (owner/repo, PR number) from the PR URL."""
        match = PR_URL_PATTERN.search(self.pr_url)
        if not match:
            raise InvalidPayloadError(f"Invalid PR URL format: {self.pr_url}")
        return match.group(1), int(match.group(2))


@dataclass(frozen=True)
class DeploymentRequest:
    environment: str = "production"
    repo: str | None = None
    run_migrations: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_environment: str = "production") -> DeploymentRequest:
        environment = data.get("environment") or default_environment
        if not isinstance(environment, str):
            raise InvalidPayloadError("environment must be a string")

        repo = data.get("repo")
        if repo is not None and not isinstance(repo, str):
            raise InvalidPayloadError("repo must be a string in 'owner/repo' format")

        run_migrations = data.get("run_migrations", data.get("runMigrations", False))
        if not isinstance(run_migrations, bool):
            raise InvalidPayloadError("run_migrations must be a boolean")

        return cls(environment=environment, repo=repo, run_migrations=run_migrations)


# ── Agent configuration ──────────────────────────────────────

@dataclass
class CodeReviewConfig:
    """
    max_steps bounds the tool calls of one review (the PR fetch counts as one).
    auto_approve posts the feedback as a PR comment when the review completes.
    """
    max_steps: int = 15
    temperature: float = 0.7
    auto_approve: bool = False
    require_tests: bool = False
    max_files_per_review: int = 10

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> CodeReviewConfig:
        config = cls(**dict(data or {}))
        if config.max_files_per_review < 1:
            raise ValueError("max_files_per_review must be at least 1")
        if config.max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        if config.auto_approve and config.max_steps < 2:
            raise ValueError("max_steps must be at least 2 when auto_approve is set")
        return config

    @property
    def file_budget(self) -> int:
        """Files one review may read: max_files_per_review, within max_steps."""
        steps_left = self.max_steps - 1 - (1 if self.auto_approve else 0)
        return max(0, min(self.max_files_per_review, steps_left))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DeploymentConfig:
    default_environment: str = "production"
    allowed_environments: list[str] = field(
        default_factory=lambda: ["development", "staging", "production"]
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> DeploymentConfig:
        config = cls(**dict(data or {}))
        if config.default_environment not in config.allowed_environments:
            raise ValueError(
                f"default_environment '{config.default_environment}' "
                f"is not in allowed_environments {config.allowed_environments}"
            )
        return config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
