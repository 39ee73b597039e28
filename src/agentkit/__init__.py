"""
agentkit — an orchestrator that routes tasks to agents backed by lazily-loaded tools.

Usage:
    from agentkit import Task, build_orchestrator, load_settings

    orchestrator = build_orchestrator(load_settings("agentkit.yaml"))
    result = await orchestrator.run(
        Task(type="code-review", data={"pr_url": "https://github.com/o/r/pull/1"})
    )
    if result.success:
        print(result.data["feedback"])

    # Or build your own agent from tools
    from agentkit import AgentConfig, ToolRegistry, create_agent
    from agentkit.tools.github import github_tools

Field names are snake_case throughout (pr_url, duration_ms, error_code).
Payloads also accept the camelCase prUrl, and TaskResult.to_dict() repeats
duration_ms as duration.
"""

from .config import Settings, load_settings
from .errors import (
    AppError,
    InvalidPayloadError,
    RateLimitError,
    ToolError,
    ToolInputError,
    UnknownTaskTypeError,
)
from .factory import Agent, AgentConfig, create_agent
from .http import HttpResponse, http_fetch
from .logger import StructuredLogger, configure_logging
from .models import (
    CodeReviewConfig,
    CodeReviewRequest,
    DeploymentConfig,
    DeploymentRequest,
    Priority,
    Task,
    TaskResult,
    TaskType,
)
from .orchestrator import Orchestrator, build_orchestrator, orchestrate_task
from .registry import ToolRegistry

__version__ = "0.1.0"

__all__ = [
    # Core
    "Orchestrator",
    "build_orchestrator",
    "orchestrate_task",
    "Agent",
    "AgentConfig",
    "create_agent",
    "ToolRegistry",
    # HTTP
    "http_fetch",
    "HttpResponse",
    # Config + logging
    "Settings",
    "load_settings",
    "StructuredLogger",
    "configure_logging",
    # Models
    "Task",
    "TaskResult",
    "TaskType",
    "Priority",
    "CodeReviewRequest",
    "CodeReviewConfig",
    "DeploymentRequest",
    "DeploymentConfig",
    # Errors
    "AppError",
    "ToolError",
    "ToolInputError",
    "RateLimitError",
    "UnknownTaskTypeError",
    "InvalidPayloadError",
]
