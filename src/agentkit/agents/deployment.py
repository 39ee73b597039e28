"""Deployment agent."""

from __future__ import annotations

from typing import Any

from ..errors import InvalidPayloadError
from ..factory import Agent, AgentConfig, create_agent
from ..logger import StructuredLogger
from ..models import DeploymentConfig, DeploymentRequest
from ..registry import ToolRegistry
from .prompts import DEPLOYMENT_INSTRUCTIONS

NAME = "deployment"


def build_deployment_handler(config: DeploymentConfig):
    async def deploy(agent: Agent, data: dict[str, Any]) -> dict[str, Any]:
        request = DeploymentRequest.from_dict(data, config.default_environment)
        if request.environment not in config.allowed_environments:
            raise InvalidPayloadError(
                f"Unknown environment '{request.environment}'. "
                f"Allowed: {config.allowed_environments}"
            )

        agent.logger.info(
            "Starting deployment",
            environment=request.environment,
            repo=request.repo,
        )

        result: dict[str, Any] = {"status": "deployed", "environment": request.environment}
        if request.repo:
            result["repo"] = await agent.call_tool("github:get_repo", repo=request.repo)
        if request.run_migrations:
            result["migrations"] = await agent.call_tool("db:migrate", direction="up")

        return result

    return deploy


def deployment_agent(
    tools: ToolRegistry,
    config: DeploymentConfig | None = None,
    logger: StructuredLogger | None = None,
) -> Agent:
    config = config or DeploymentConfig()
    return create_agent(
        AgentConfig(
            name=NAME,
            description="Handles deployment and infrastructure tasks",
            instructions=DEPLOYMENT_INSTRUCTIONS,
            tools=tools,
            config=config.to_dict(),
        ),
        handler=build_deployment_handler(config),
        logger=logger,
    )
