"""
Agent Factory — builds named agents from a config and a behavior.

An agent bundles instructions, a tool registry and one entry point,
execute(data). The behavior behind execute is a handler passed in at
construction; agents are never patched after they are built.

    agent = create_agent(
        AgentConfig(name="echo", description="...", instructions="...", tools=registry),
        handler=my_handler,   # async def my_handler(agent, data) -> Any
    )
    result = await agent.execute({"key": "value"})
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping

from langchain_core.tools import BaseTool

from .errors import ToolError
from .logger import StructuredLogger, default_logger
from .registry import ToolRegistry
from .tools.base import describe_tool, run_tool

AgentHandler = Callable[["Agent", dict[str, Any]], Awaitable[Any]]


@dataclass
class AgentConfig:
    """Everything an agent is built from."""
    name: str
    description: str
    instructions: str
    tools: ToolRegistry = field(default_factory=ToolRegistry)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Agent config requires a 'name'")


async def echo_handler(agent: Agent, data: dict[str, Any]) -> dict[str, Any]:
    """Default behavior: hand the data back."""
    return {"status": "success", "data": data}


class Agent:
    """
    A named bundle of instructions and tools with a single entry point.

    Agents hold no per-call state; the same instance can serve any number
    of tasks.
    """

    def __init__(
        self,
        config: AgentConfig,
        handler: AgentHandler = echo_handler,
        logger: StructuredLogger | None = None,
    ):
        self._config = config
        self._handler = handler
        self.logger = (logger or default_logger()).bind(agent=config.name)

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def description(self) -> str:
        return self._config.description

    @property
    def instructions(self) -> str:
        return self._config.instructions

    @property
    def tools(self) -> ToolRegistry:
        return self._config.tools

    @property
    def config(self) -> dict[str, Any]:
        return self._config.config

    async def execute(self, data: Mapping[str, Any]) -> Any:
        return await self._handler(self, dict(data))

    # ── Tools ────────────────────────────────────────────────

    def tool(self, key: str) -> BaseTool:
        if key not in self.tools:
            raise ToolError(f"Tool '{key}' is not available to agent '{self.name}'", key)
        return self.tools.get(key)

    async def call_tool(self, key: str, **args: Any) -> Any:
        """Validate args against the tool's schema and run it."""
        tool = self.tool(key)
        self.logger.debug("Calling tool", tool=key)
        return await run_tool(tool, args, tool_name=key)

    # ── Prompt ───────────────────────────────────────────────

    def system_prompt(self, task_context: str | None = None) -> str:
        """
        Instructions followed by a block for every bound tool, then the task.
        """
        prompt = self.instructions
        blocks = [describe_tool(self.tools.get(key)) for key in self.tools.keys()]
        if blocks:
            prompt += "\n\n# Tools\n\n" + "\n\n".join(blocks)
        if task_context:
            prompt += f"\n\n# Current Task\n\n{task_context}\n"

        # Clean up triple+ blank lines
        return re.sub(r"\n{3,}", "\n\n", prompt)

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r}, tools={self.tools.keys()})"


def create_agent(
    config: AgentConfig,
    handler: AgentHandler | None = None,
    logger: StructuredLogger | None = None,
) -> Agent:
    return Agent(config, handler or echo_handler, logger)
