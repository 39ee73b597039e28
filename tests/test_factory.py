"""
Unit tests for the agent factory.

These tests build agents around small in-memory registries and never
touch the network or a chat model.
"""

import pytest
from pydantic import BaseModel

from agentkit.errors import ToolError, ToolInputError
from agentkit.factory import Agent, AgentConfig, create_agent, echo_handler
from agentkit.registry import ToolRegistry
from agentkit.tools.base import make_tool


# ── Fixtures ─────────────────────────────────────────────────

class _AddInput(BaseModel):
    a: int
    b: int = 1


def _make_registry(calls: list | None = None) -> ToolRegistry:
    calls = [] if calls is None else calls

    def _load():
        calls.append("math:add")

        async def add(a: int, b: int = 1) -> int:
            return a + b

        return make_tool("math_add", "Add two integers.", _AddInput, add)

    registry = ToolRegistry("math")
    registry.register("math:add", _load)
    return registry


def _make_config(**overrides) -> AgentConfig:
    defaults = {
        "name": "test-agent",
        "description": "A test agent",
        "instructions": "You are a test agent.",
        "tools": _make_registry(),
    }
    defaults.update(overrides)
    return AgentConfig(**defaults)


# ── AgentConfig ──────────────────────────────────────────────

class TestAgentConfig:
    def test_requires_name(self):
        with pytest.raises(ValueError, match="name"):
            AgentConfig(name="", description="x", instructions="y")

    def test_defaults(self):
        config = AgentConfig(name="a", description="b", instructions="c")
        assert len(config.tools) == 0
        assert config.config == {}


# ── create_agent ─────────────────────────────────────────────

class TestCreateAgent:
    def test_exposes_config(self):
        config = _make_config(config={"retries": 2})
        agent = create_agent(config)

        assert isinstance(agent, Agent)
        assert agent.name == "test-agent"
        assert agent.description == "A test agent"
        assert agent.instructions == "You are a test agent."
        assert agent.tools is config.tools
        assert agent.config == {"retries": 2}

    async def test_default_handler_echoes(self):
        agent = create_agent(_make_config())
        result = await agent.execute({"key": "value"})
        assert result == {"status": "success", "data": {"key": "value"}}

    async def test_echo_handler_directly(self):
        agent = create_agent(_make_config())
        assert await echo_handler(agent, {}) == {"status": "success", "data": {}}

    async def test_custom_handler_receives_agent_and_data(self):
        seen = {}

        async def handler(agent, data):
            seen["agent"] = agent
            seen["data"] = data
            return "done"

        agent = create_agent(_make_config(), handler=handler)
        assert await agent.execute({"n": 1}) == "done"
        assert seen == {"agent": agent, "data": {"n": 1}}

    async def test_agents_are_independent(self):
        async def handler(agent, data):
            return agent.name

        first = create_agent(_make_config(name="first"), handler=handler)
        second = create_agent(_make_config(name="second"))

        assert await first.execute({}) == "first"
        assert await second.execute({}) == {"status": "success", "data": {}}

    def test_repr(self):
        assert repr(create_agent(_make_config())) == "Agent(name='test-agent', tools=['math:add'])"


# ── Tools ────────────────────────────────────────────────────

class TestAgentTools:
    async def test_call_tool(self):
        agent = create_agent(_make_config())
        assert await agent.call_tool("math:add", a=2, b=3) == 5
        assert await agent.call_tool("math:add", a=2) == 3

    async def test_call_tool_validates(self):
        agent = create_agent(_make_config())
        with pytest.raises(ToolInputError) as exc:
            await agent.call_tool("math:add", a="two")
        assert exc.value.tool_name == "math:add"

    def test_unbound_tool(self):
        agent = create_agent(_make_config())
        with pytest.raises(ToolError, match="not available to agent 'test-agent'"):
            agent.tool("github:get_pr")

    def test_tools_resolved_lazily(self):
        calls = []
        agent = create_agent(_make_config(tools=_make_registry(calls)))
        assert calls == []
        agent.tool("math:add")
        agent.tool("math:add")
        assert calls == ["math:add"]


# ── System prompt ────────────────────────────────────────────

class TestSystemPrompt:
    def test_includes_tool_blocks(self):
        prompt = create_agent(_make_config()).system_prompt()
        assert prompt.startswith("You are a test agent.")
        assert "# Tools" in prompt
        assert "## Tool: math_add" in prompt
        assert "# Current Task" not in prompt

    def test_task_context(self):
        prompt = create_agent(_make_config()).system_prompt("Add 2 and 3.")
        assert prompt.rstrip().endswith("# Current Task\n\nAdd 2 and 3.")

    def test_no_tools(self):
        agent = create_agent(AgentConfig(name="bare", description="", instructions="Hello."))
        assert agent.system_prompt() == "Hello."

    def test_no_triple_blank_lines(self):
        agent = create_agent(_make_config(instructions="Top.\n\n\n\n\nBottom."))
        assert "\n\n\n" not in agent.system_prompt("Go.")
