"""Tests for the code review and deployment agents."""

import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from agentkit.agents import code_review_agent, deployment_agent
from agentkit.agents.code_review import DEFAULT_FEEDBACK, MISSING_TESTS_FEEDBACK, init_model
from agentkit.errors import InvalidPayloadError
from agentkit.models import CodeReviewConfig, DeploymentConfig
from agentkit.registry import ToolRegistry

PR_URL = "https://github.com/acme/widgets/pull/42"


@pytest.fixture
def review_tools(github, filesystem):
    return ToolRegistry.merge(github, filesystem, name="code-review")


@pytest.fixture
def deploy_tools(github, database):
    return ToolRegistry.merge(github, database, name="deployment")


# ── Code review ──────────────────────────────────────────────

class TestCodeReviewAgent:
    async def test_review(self, review_tools, transport, logger):
        agent = code_review_agent(review_tools, logger=logger)
        result = await agent.execute({"pr_url": PR_URL})

        assert result == {
            "pr_url": PR_URL,
            "status": "completed",
            "feedback": DEFAULT_FEEDBACK,
            "repo": "acme/widgets",
            "pr_number": 42,
            "files_reviewed": ["src/index.ts", "src/utils.ts"],
        }
        assert transport.requests[0].url.path == "/repos/acme/widgets/pulls/42"

    async def test_camel_case_alias(self, review_tools, logger):
        agent = code_review_agent(review_tools, logger=logger)
        result = await agent.execute({"prUrl": PR_URL})
        assert result["pr_url"] == PR_URL

    async def test_missing_url(self, review_tools, logger):
        agent = code_review_agent(review_tools, logger=logger)
        with pytest.raises(InvalidPayloadError, match="pr_url is required"):
            await agent.execute({})

    async def test_non_string_url(self, review_tools, logger):
        agent = code_review_agent(review_tools, logger=logger)
        with pytest.raises(InvalidPayloadError):
            await agent.execute({"pr_url": 42})

    async def test_invalid_url(self, review_tools, transport, logger):
        agent = code_review_agent(review_tools, logger=logger)
        with pytest.raises(InvalidPayloadError, match="Invalid PR URL format"):
            await agent.execute({"pr_url": "https://gitlab.com/acme/widgets/-/merge_requests/1"})
        assert len(transport.requests) == 0

    async def test_max_files(self, review_tools, logger):
        agent = code_review_agent(
            review_tools, CodeReviewConfig(max_files_per_review=1), logger=logger,
        )
        result = await agent.execute({"pr_url": PR_URL})
        assert result["files_reviewed"] == ["src/index.ts"]

    async def test_max_steps_limits_file_reads(self, review_tools, logger):
        agent = code_review_agent(review_tools, CodeReviewConfig(max_steps=2), logger=logger)
        result = await agent.execute({"pr_url": PR_URL})
        assert result["files_reviewed"] == ["src/index.ts"]

    async def test_max_steps_counts_auto_approve_comment(self, review_tools, transport, logger):
        config = CodeReviewConfig(max_steps=1, auto_approve=True)
        agent = code_review_agent(review_tools, config, logger=logger)
        result = await agent.execute({"pr_url": PR_URL})

        assert result["files_reviewed"] == []
        assert "comment_url" not in result
        assert all(r.method == "GET" for r in transport.requests)

    async def test_max_steps_leaves_room_for_comment(self, review_tools, transport, logger):
        config = CodeReviewConfig(max_steps=2, auto_approve=True)
        agent = code_review_agent(review_tools, config, logger=logger)
        result = await agent.execute({"pr_url": PR_URL})

        assert result["files_reviewed"] == []
        assert "comment_url" in result
        assert transport.requests[-1].method == "POST"

    def test_auto_approve_needs_two_steps(self):
        with pytest.raises(ValueError, match="at least 2 when auto_approve"):
            CodeReviewConfig.from_dict({"max_steps": 1, "auto_approve": True})

    async def test_auto_approve_posts_comment(self, review_tools, transport, logger):
        agent = code_review_agent(review_tools, CodeReviewConfig(auto_approve=True), logger=logger)
        result = await agent.execute({"pr_url": PR_URL})

        assert result["comment_url"] == "https://github.com/acme/widgets/pull/42#issuecomment-123456"
        comment = transport.requests[-1]
        assert comment.url.path == "/repos/acme/widgets/issues/42/comments"
        assert json.loads(comment.content) == {"body": DEFAULT_FEEDBACK}

    async def test_no_comment_without_auto_approve(self, review_tools, transport, logger):
        agent = code_review_agent(review_tools, logger=logger)
        result = await agent.execute({"pr_url": PR_URL})
        assert "comment_url" not in result
        assert all(r.method == "GET" for r in transport.requests)

    async def test_require_tests(self, review_tools, logger):
        agent = code_review_agent(review_tools, CodeReviewConfig(require_tests=True), logger=logger)
        result = await agent.execute({"pr_url": PR_URL})
        assert result["status"] == "failed"
        assert result["feedback"] == MISSING_TESTS_FEEDBACK

    async def test_chat_model_feedback(self, review_tools, logger):
        model = FakeListChatModel(responses=["Consider adding tests for utils.ts."])
        agent = code_review_agent(review_tools, model=model, logger=logger)
        result = await agent.execute({"pr_url": PR_URL})
        assert result["status"] == "completed"
        assert result["feedback"] == "Consider adding tests for utils.ts."

    def test_requires_tools(self, filesystem, logger):
        with pytest.raises(ValueError, match="github:get_pr"):
            code_review_agent(filesystem, logger=logger)

    def test_config_exposed(self, filesystem, logger):
        registry = ToolRegistry("stub")
        registry.register("github:get_pr", lambda: None)
        agent = code_review_agent(
            ToolRegistry.merge(registry, filesystem),
            CodeReviewConfig(temperature=0.2),
            logger=logger,
        )
        assert agent.name == "code-review"
        assert agent.config["temperature"] == 0.2
        assert agent.config["max_files_per_review"] == 10

    def test_init_model_passthrough(self):
        model = FakeListChatModel(responses=["ok"])
        assert init_model(model, 0.5) is model
        assert init_model(None, 0.5) is None


# ── Deployment ───────────────────────────────────────────────

class TestDeploymentAgent:
    async def test_default_environment(self, deploy_tools, logger):
        agent = deployment_agent(deploy_tools, logger=logger)
        assert await agent.execute({}) == {"status": "deployed", "environment": "production"}

    async def test_explicit_environment(self, deploy_tools, logger):
        agent = deployment_agent(deploy_tools, logger=logger)
        result = await agent.execute({"environment": "staging"})
        assert result["environment"] == "staging"

    async def test_unknown_environment(self, deploy_tools, logger):
        agent = deployment_agent(deploy_tools, logger=logger)
        with pytest.raises(InvalidPayloadError, match="Unknown environment 'moon'"):
            await agent.execute({"environment": "moon"})

    async def test_configured_default(self, deploy_tools, logger):
        config = DeploymentConfig(default_environment="staging", allowed_environments=["staging"])
        agent = deployment_agent(deploy_tools, config, logger=logger)
        assert (await agent.execute({}))["environment"] == "staging"

    def test_config_default_must_be_allowed(self):
        with pytest.raises(ValueError, match="not in allowed_environments"):
            DeploymentConfig.from_dict({"default_environment": "qa"})

    async def test_with_repo_and_migrations(self, deploy_tools, logger):
        agent = deployment_agent(deploy_tools, logger=logger)
        result = await agent.execute({"repo": "acme/widgets", "runMigrations": True})

        assert result["repo"]["full_name"] == "acme/widgets"
        assert result["migrations"]["direction"] == "up"
        assert result["migrations"]["applied"] == ["0003_add_task_log", "0004_add_priority"]

    async def test_run_migrations_must_be_bool(self, deploy_tools, logger):
        agent = deployment_agent(deploy_tools, logger=logger)
        with pytest.raises(InvalidPayloadError):
            await agent.execute({"run_migrations": "yes"})
