from __future__ import annotations

from typing import Literal

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from ...errors import ToolError
from ...logger import StructuredLogger
from ..base import make_tool

# Mocked migration history, oldest first. The last PENDING entries are unapplied.
MIGRATIONS = [
    "0001_initial",
    "0002_add_agents",
    "0003_add_task_log",
    "0004_add_priority",
]
PENDING = 2


class MigrateInput(BaseModel):
    direction: Literal["up", "down"] = "up"
    target: str | None = Field(default=None, description="Migration to stop at (inclusive)")
    dry_run: bool = Field(default=False, description="Report what would run without applying")


def _plan(direction: str, target: str | None) -> list[str]:
    applied = MIGRATIONS[: len(MIGRATIONS) - PENDING]
    pending = MIGRATIONS[len(MIGRATIONS) - PENDING:]
    steps = pending if direction == "up" else list(reversed(applied))[:1]

    if target is None:
        return steps
    if target not in MIGRATIONS:
        raise ToolError(f"Unknown migration: {target}", "db:migrate")
    if direction == "down":
        steps = list(reversed(applied))
    if target not in steps:
        return []
    return steps[: steps.index(target) + 1]


def migrate_tool(logger: StructuredLogger) -> StructuredTool:
    async def migrate(direction: str = "up", target: str | None = None, dry_run: bool = False) -> dict:
        steps = _plan(direction, target)
        logger.info(
            "Running migrations",
            direction=direction,
            steps=steps,
            dry_run=dry_run,
        )
        return {"applied": steps, "direction": direction, "dry_run": dry_run}

    return make_tool(
        "db_migrate",
        "Apply or roll back database schema migrations.",
        MigrateInput,
        migrate,
    )
