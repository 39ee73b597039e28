"""
Code review agent.

Reviews a pull request: fetches it, reads the changed files and produces
feedback. Feedback comes from a chat model when one is configured and is a
fixed acknowledgement otherwise.
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from ..factory import Agent, AgentConfig, create_agent
from ..logger import StructuredLogger
from ..models import CodeReviewConfig, CodeReviewRequest, ReviewStatus
from ..registry import ToolRegistry
from .prompts import CODE_REVIEW_INSTRUCTIONS, CODE_REVIEW_TASK

logger = logging.getLogger(__name__)

NAME = "code-review"
DEFAULT_FEEDBACK = "Code review completed successfully"
MISSING_TESTS_FEEDBACK = "Pull request changes no test files"


def init_model(model: str | BaseChatModel | None, temperature: float) -> BaseChatModel | None:
    """Accept a model instance, a provider:model string, or None."""
    if model is None or isinstance(model, BaseChatModel):
        return model

    from langchain.chat_models import init_chat_model

    logger.debug(f"Initializing chat model {model}")
    return init_chat_model(model, temperature=temperature)


def _is_test_file(path: str) -> bool:
    lowered = path.lower()
    return "test" in lowered or "spec" in lowered


def _review_prompt(repo: str, pr_number: int, pr: dict, files: dict[str, str]) -> str:
    lines = [
        CODE_REVIEW_TASK.format(pr_number=pr_number, repo=repo),
        "",
        f"Title: {pr['title']}",
        f"Author: {pr['author']}",
        f"+{pr['additions']} / -{pr['deletions']}",
    ]
    for path, content in files.items():
        lines += ["", f"### {path}", "```", content, "```"]
    return "\n".join(lines)


def build_code_review_handler(config: CodeReviewConfig, chat_model: BaseChatModel | None):
    async def review(agent: Agent, data: dict[str, Any]) -> dict[str, Any]:
        request = CodeReviewRequest.from_dict(data)
        repo, pr_number = request.parse()

        agent.logger.info("Starting code review", pr_url=request.pr_url)

        pr = await agent.call_tool("github:get_pr", repo=repo, pr_number=pr_number)
        paths = pr["changed_files"][: config.file_budget]

        files: dict[str, str] = {}
        for path in paths:
            read = await agent.call_tool("files:read", path=path)
            files[path] = read["content"]

        status = ReviewStatus.COMPLETED
        if config.require_tests and not any(_is_test_file(p) for p in pr["changed_files"]):
            status = ReviewStatus.FAILED
            feedback = MISSING_TESTS_FEEDBACK
        elif chat_model is not None:
            response = await chat_model.ainvoke([
                SystemMessage(content=agent.system_prompt()),
                HumanMessage(content=_review_prompt(repo, pr_number, pr, files)),
            ])
            feedback = response.content if isinstance(response.content, str) else str(response.content)
        else:
            feedback = DEFAULT_FEEDBACK

        comment_url = None
        steps_used = 1 + len(paths)
        if (
            config.auto_approve
            and status is ReviewStatus.COMPLETED
            and steps_used < config.max_steps
        ):
            comment = await agent.call_tool(
                "github:create_comment", repo=repo, pr_number=pr_number, body=feedback,
            )
            comment_url = comment["url"]

        agent.logger.info(
            "Code review finished",
            pr_url=request.pr_url,
            status=status.value,
            files=len(paths),
        )
        result = {
            "pr_url": request.pr_url,
            "status": status.value,
            "feedback": feedback,
            "repo": repo,
            "pr_number": pr_number,
            "files_reviewed": paths,
        }
        if comment_url:
            result["comment_url"] = comment_url
        return result

    return review


def code_review_agent(
    tools: ToolRegistry,
    config: CodeReviewConfig | None = None,
    model: str | BaseChatModel | None = None,
    logger: StructuredLogger | None = None,
) -> Agent:
    """
    Build the code review agent.

    tools must provide github:get_pr and files:read, plus
    github:create_comment when auto_approve is set.
    """
    config = config or CodeReviewConfig()
    required = ["github:get_pr", "files:read"]
    if config.auto_approve:
        required.append("github:create_comment")
    missing = [k for k in required if k not in tools]
    if missing:
        raise ValueError(f"Code review agent is missing required tools: {missing}")

    chat_model = init_model(model, config.temperature)
    return create_agent(
        AgentConfig(
            name=NAME,
            description="Reviews pull requests and provides feedback",
            instructions=CODE_REVIEW_INSTRUCTIONS,
            tools=tools,
            config=config.to_dict(),
        ),
        handler=build_code_review_handler(config, chat_model),
        logger=logger,
    )
