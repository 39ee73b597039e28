#!/usr/bin/env python3
"""
Run Task — submit one task to the orchestrator and print the result envelope.

Usage:
    # List task types and the tools each agent can use
    python scripts/run_task.py --list

    # Review a pull request (mocked GitHub API)
    python scripts/run_task.py --type code-review --data '{"pr_url": "https://github.com/o/r/pull/1"}'

    # Deploy with settings from a YAML file
    python scripts/run_task.py --config agentkit.yaml --type deployment --data '{"environment": "staging"}'

    # Show the composed system prompt for an agent
    python scripts/run_task.py --type code-review --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Ensure src/ is on path for development
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from agentkit import Task, build_orchestrator, configure_logging, load_settings


def parse_data(raw: str | None) -> dict:
    if not raw:
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("--data must be a JSON object")
    return data


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Submit a task to the agent orchestrator.",
    )
    parser.add_argument("--list", action="store_true", help="List task types and agent tools")
    parser.add_argument("--type", "-t", type=str, help="Task type (e.g. code-review, deployment)")
    parser.add_argument("--data", "-d", type=str, default=None, help="Task data as a JSON object")
    parser.add_argument("--user", type=str, default=None, help="User ID to attach to the task")
    parser.add_argument("--priority", choices=["low", "medium", "high"], default=None)
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to a YAML settings file")
    parser.add_argument("--model", "-m", type=str, default=None, help="Chat model override")
    parser.add_argument("--dry-run", action="store_true", help="Print the agent's system prompt only")
    parser.add_argument("--verbose", "-v", action="store_true")

    args = parser.parse_args()

    settings = load_settings(args.config)
    if args.verbose:
        settings.log_level = "DEBUG"
    if args.model:
        settings.model = args.model

    logger = configure_logging(settings.log_level)
    orchestrator = build_orchestrator(settings, logger=logger)

    if args.list:
        print(f"\nTask types ({len(orchestrator.task_types)}):\n")
        for task_type in orchestrator.task_types:
            agent = orchestrator.agent_for(task_type)
            print(f"  {task_type:<15} {agent.description}")
            for key in agent.tools.keys():
                print(f"    - {key}")
            print()
        return 0

    if not args.type:
        parser.error("Use --type <task type> or --list")

    if args.dry_run:
        if args.type not in orchestrator.task_types:
            parser.error(f"Unknown task type: {args.type}")
        agent = orchestrator.agent_for(args.type)
        print(f"\n{'='*60}")
        print(f"  DRY RUN — {agent.name} system prompt")
        print(f"{'='*60}\n")
        print(agent.system_prompt())
        print(f"\n{'='*60}")
        return 0

    try:
        data = parse_data(args.data)
    except ValueError as e:
        parser.error(f"Invalid --data: {e}")

    task = Task(type=args.type, data=data, user_id=args.user, priority=args.priority)
    result = asyncio.run(orchestrator.run(task))
    print(json.dumps(result.to_dict(), indent=2, default=str))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
