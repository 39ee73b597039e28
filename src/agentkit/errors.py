"""
Error taxonomy.

AppError is the root. Everything below the orchestrator raises one of these
(or lets an unexpected exception propagate); the orchestrator is the single
place that turns errors into a result envelope.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base application error carrying a code, an HTTP-like status and a retry hint."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int | None = 500,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.retryable = retryable

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "retryable": self.retryable,
        }

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r}, code={self.code!r}, status_code={self.status_code})"


class ToolError(AppError):
    """A tool failed while running."""

    def __init__(self, message: str, tool_name: str, retryable: bool = False):
        super().__init__(message, "TOOL_ERROR", 500, retryable)
        self.tool_name = tool_name

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "tool_name": self.tool_name}


class ToolInputError(ToolError):
    """Tool input did not match the tool's declared schema."""

    def __init__(self, tool_name: str, errors: list[dict[str, Any]]):
        fields = ", ".join(
            ".".join(str(p) for p in e.get("loc", ())) or "<input>" for e in errors
        )
        super().__init__(f"Invalid input for {tool_name}: {fields}", tool_name)
        self.code = "INVALID_TOOL_INPUT"
        self.status_code = 400
        self.errors = errors


class RateLimitError(AppError):
    def __init__(self, tool_name: str, retry_after_ms: int):
        super().__init__(
            f"Rate limit exceeded for {tool_name}. Retry after {retry_after_ms}ms",
            "RATE_LIMIT",
            429,
            True,
        )
        self.tool_name = tool_name
        self.retry_after_ms = retry_after_ms

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "tool_name": self.tool_name,
            "retry_after_ms": self.retry_after_ms,
        }


class UnknownTaskTypeError(AppError):
    def __init__(self, task_type: str):
        super().__init__(f"Unknown task type: {task_type}", "UNKNOWN_TASK_TYPE", 400)
        self.task_type = task_type


class InvalidPayloadError(AppError):
    """Task data could not be turned into the agent's payload."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_PAYLOAD", 400)
