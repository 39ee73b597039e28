"""
Orchestrator — routes tasks to agents and normalizes the outcome.

    orchestrator = build_orchestrator()
    result = await orchestrator.run(Task(type="code-review", data={"pr_url": url}))

run() never raises: every failure, including an unknown task type, comes
back as TaskResult(success=False, ...). There is no retry; an error's
retryable flag is logged for the caller to act on.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from .agents.code_review import code_review_agent
from .agents.deployment import deployment_agent
from .config import Settings
from .errors import AppError, UnknownTaskTypeError
from .factory import Agent
from .logger import StructuredLogger, configure_logging, default_logger
from .models import CodeReviewConfig, DeploymentConfig, Task, TaskResult, TaskType
from .registry import ToolRegistry
from .tools.database import database_tools
from .tools.filesystem import filesystem_tools
from .tools.github import GitHubClient, github_tools


def _elapsed_ms(start: float) -> int:
    return max(0, round((time.monotonic() - start) * 1000))


class Orchestrator:
    """Static dispatch table from task type to agent."""

    def __init__(
        self,
        agents: Mapping[str, Agent],
        logger: StructuredLogger | None = None,
    ):
        self._agents = {
            (key.value if isinstance(key, TaskType) else key): agent
            for key, agent in agents.items()
        }
        self.logger = logger or default_logger()

    @property
    def task_types(self) -> list[str]:
        return list(self._agents.keys())

    def agent_for(self, task_type: str) -> Agent:
        agent = self._agents.get(task_type)
        if agent is None:
            raise UnknownTaskTypeError(task_type)
        return agent

    async def run(self, task: Task | Mapping[str, Any]) -> TaskResult:
        start = time.monotonic()
        task_type = task.type if isinstance(task, Task) else task.get("type")

        try:
            if not isinstance(task, Task):
                task = Task.from_dict(task)

            self.logger.info(
                "Orchestrating task",
                type=task.type,
                user_id=task.user_id,
                priority=task.priority.value if task.priority else None,
            )

            agent = self.agent_for(task.type)
            data = await agent.execute(task.data)
        except Exception as e:
            duration = _elapsed_ms(start)
            meta: dict[str, Any] = {"type": task_type, "duration_ms": duration}
            if isinstance(e, AppError):
                meta.update(code=e.code, status_code=e.status_code, retryable=e.retryable)
            self.logger.error("Task failed", exc_info=e, **meta)

            return TaskResult(
                success=False,
                duration_ms=duration,
                error=str(e) or type(e).__name__,
                error_code=e.code if isinstance(e, AppError) else None,
                status_code=e.status_code if isinstance(e, AppError) else None,
            )

        duration = _elapsed_ms(start)
        self.logger.info("Task completed successfully", type=task.type, duration_ms=duration)
        return TaskResult(success=True, duration_ms=duration, data=data)


def build_tools(
    settings: Settings,
    logger: StructuredLogger,
    github_client: GitHubClient | None = None,
) -> dict[str, ToolRegistry]:
    client = github_client or GitHubClient(
        base_url=settings.github_api_url,
        token=settings.github_token,
        timeout_ms=settings.http_timeout_ms,
        logger=logger,
    )
    return {
        "github": github_tools(client, cache=settings.cache_tools),
        "filesystem": filesystem_tools(logger, cache=settings.cache_tools),
        "database": database_tools(logger, cache=settings.cache_tools),
    }


def build_orchestrator(
    settings: Settings | None = None,
    logger: StructuredLogger | None = None,
    github_client: GitHubClient | None = None,
    model: Any = None,
) -> Orchestrator:
    """
    Composition root: settings -> logger -> tools -> agents -> orchestrator.

    model overrides settings.model (a provider:model string or a chat model).
    """
    settings = settings or Settings()
    logger = logger or configure_logging(settings.log_level)
    tools = build_tools(settings, logger, github_client)

    review = code_review_agent(
        ToolRegistry.merge(tools["github"], tools["filesystem"], name="code-review", cache=settings.cache_tools),
        CodeReviewConfig.from_dict(settings.agent_options(TaskType.CODE_REVIEW.value)),
        model=model if model is not None else settings.model,
        logger=logger,
    )
    deploy = deployment_agent(
        ToolRegistry.merge(tools["github"], tools["database"], name="deployment", cache=settings.cache_tools),
        DeploymentConfig.from_dict(settings.agent_options(TaskType.DEPLOYMENT.value)),
        logger=logger,
    )

    return Orchestrator(
        {TaskType.CODE_REVIEW: review, TaskType.DEPLOYMENT: deploy},
        logger=logger,
    )


_default: Orchestrator | None = None


async def orchestrate_task(task: Task | Mapping[str, Any]) -> TaskResult:
    """Run a task on a process-wide orchestrator built from default settings."""
    global _default
    if _default is None:
        _default = build_orchestrator(logger=default_logger())
    return await _default.run(task)
