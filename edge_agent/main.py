#!/usr/bin/env python3
# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Edge Stack CLI - simplified command entry point.

Usage:
    edge work "design a rate limiter" --mode architect   # Handle a task
    echo "fix the login form" | edge work                # Task from stdin
    edge mode intern                                     # Switch mode
    edge status                                          # Mode, skills, providers
    edge skills                                          # List loaded skills
    edge config                                          # Expected env variables
    edge run durable-objects design-do-pattern --watch   # Run a skill script
    edge hook < event.json                               # Feed a lifecycle event to beads sync

Environment Variables:
    ANTHROPIC_API_KEY, OPENAI_API_KEY, GOOGLE_API_KEY, LOCAL_LLM_URL
    SKILLS_DIR: Directory of project skills (default: ./skills)
"""

import argparse
import asyncio
import inspect
import json
import logging
import subprocess
import sys
from typing import List, Optional

from edge_agent import __version__
from edge_agent.config import (
    PROVIDER_DESCRIPTIONS,
    PROVIDER_ENV_VARS,
    Settings,
    build_provider_configs,
    settings,
)
from edge_agent.core.agents.orchestrator import AgentStatus, EdgeStackAgent
from edge_agent.core.agents.personas import MODE_EXAMPLES
from edge_agent.core.exceptions import EdgeAgentException, InvalidModeError, InvalidTaskError
from edge_agent.core.models.harness import create_default_harness
from edge_agent.core.models.modes import AgentMode
from edge_agent.core.skills.loader import FilesystemSkillSource, builtin_skills_path
from edge_agent.core.skills.registry import SkillRegistry
from edge_agent.services.beads import BeadsClient
from edge_agent.services.beads_sync import BeadsSyncAdapter
from edge_agent.services.script_runner import resolve_script, run_script, watch_script

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag"""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_registry(config: Settings) -> SkillRegistry:
    """Project skills first so they shadow built-in skills of the same name."""
    registry = SkillRegistry()
    registry.register_source(FilesystemSkillSource(config.skills_dir))
    if config.include_builtin_skills:
        registry.register_source(FilesystemSkillSource(builtin_skills_path()))
    registry.load()
    return registry


async def create_agent(config: Settings) -> EdgeStackAgent:
    """
    Initialize providers and skills and build the agent.

    Raises:
        AllProvidersFailedError: If no provider could be initialized
    """
    harness = create_default_harness()
    await harness.initialize(build_provider_configs(config))
    registry = build_registry(config)
    return EdgeStackAgent(
        harness,
        registry,
        mode=config.default_mode,
        max_tokens=config.max_tokens
    )


async def initialize(config: Settings) -> Optional[EdgeStackAgent]:
    """Create the agent, printing a readable message on failure."""
    print("🚀 Initializing Edge Stack Agent...", file=sys.stderr)
    try:
        return await create_agent(config)
    except EdgeAgentException as e:
        print(f"❌ Initialization failed: {e.message}", file=sys.stderr)
        return None


def format_status(status: AgentStatus) -> str:
    lines = [
        "📊 Edge Stack Agent Status:",
        f"   Mode: {status.mode.value}",
        f"   Skills: {status.skill_count} loaded",
        f"   Primary Provider: {status.primary or 'None'}",
        f"   Active Providers: {', '.join(status.active_providers) or 'None'}",
        f"   Available Providers: {', '.join(status.providers)}",
    ]
    return "\n".join(lines)


def read_task_from_stdin() -> str:
    if sys.stdin.isatty():
        print("📝 Enter task description (Ctrl+D to finish):", file=sys.stderr)
    return sys.stdin.read().strip()


# =============================================================================
# Commands
# =============================================================================

async def cmd_work(args: argparse.Namespace, config: Settings) -> int:
    agent = await initialize(config)
    if agent is None:
        return 1

    agent.set_mode(args.mode)

    task = args.task or read_task_from_stdin()
    if not task or not task.strip():
        print("❌ No task provided", file=sys.stderr)
        return 1

    try:
        response = await agent.handle_task(task, context=args.context)
    except InvalidTaskError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    print("\n🤖 Agent Response:")
    print(response)

    if "bd " in response:
        print("\n💡 Beads commands detected. Run them to track your work.")

    return 0


async def cmd_mode(args: argparse.Namespace, config: Settings) -> int:
    try:
        mode = AgentMode.parse(args.mode)
    except InvalidModeError:
        print("❌ Invalid mode. Use: architect, worker, or intern", file=sys.stderr)
        return 1

    agent = await initialize(config)
    if agent is None:
        return 1

    agent.set_mode(mode)
    print(f"✅ Mode set to: {mode.value}")
    print("\nExamples:")
    for example in MODE_EXAMPLES:
        print(f'  {mode.value}: "{example}"')
    return 0


async def cmd_status(args: argparse.Namespace, config: Settings) -> int:
    agent = await initialize(config)
    if agent is None:
        return 1

    print(format_status(agent.get_status()))
    return 0


async def cmd_skills(args: argparse.Namespace, config: Settings) -> int:
    agent = await initialize(config)
    if agent is None:
        return 1

    print("📚 Available Skills:")
    for name in agent.get_status().skills:
        print(f"   - {name}")
    return 0


async def cmd_config(args: argparse.Namespace, config: Settings) -> int:
    print("⚙️ Configuration:")
    print("\nModel Providers (set environment variables):")
    for provider, env_vars in PROVIDER_ENV_VARS.items():
        print(f"   {provider}: {', '.join(env_vars)} - {PROVIDER_DESCRIPTIONS[provider]}")

    configured = list(build_provider_configs(config).keys())
    print(f"\nConfigured: {', '.join(configured) or 'none'}")
    print("\nExample:")
    print('   export ANTHROPIC_API_KEY="sk-ant-..."')
    return 0


def cmd_run(args: argparse.Namespace, config: Settings) -> int:
    """Run a skill script; with --watch, block on the calling thread until Ctrl+C."""
    try:
        script_path = resolve_script(config.skills_dir, args.skill, args.script)
    except EdgeAgentException as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    if args.watch:
        watch_script(script_path, script_path.parent.parent)
        return 0

    try:
        run_script(script_path)
    except (subprocess.CalledProcessError, OSError) as e:
        print(f"❌ Failed to run script: {e}", file=sys.stderr)
        return 1
    return 0


async def cmd_hook(args: argparse.Namespace, config: Settings) -> int:
    raw = sys.stdin.read().strip()
    if not raw:
        return 0

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring malformed hook payload: {e}")
        return 0

    adapter = BeadsSyncAdapter(BeadsClient(config.beads_binary), worktree=args.worktree)
    events = payload if isinstance(payload, list) else [payload]
    for event in events:
        await adapter.handle_event(event)
    return 0


COMMANDS = {
    "work": cmd_work,
    "mode": cmd_mode,
    "status": cmd_status,
    "skills": cmd_skills,
    "config": cmd_config,
    "run": cmd_run,
    "hook": cmd_hook,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edge",
        description="Simplified Edge Stack Development Agent"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    work = subparsers.add_parser("work", help="Work on a task with the agent")
    work.add_argument("task", nargs="?", help="Task description or omit to read from stdin")
    work.add_argument(
        "-m", "--mode",
        choices=AgentMode.values(),
        default=settings.default_mode,
        help="Agent mode (architect, worker, intern)"
    )
    work.add_argument("-c", "--context", help="Additional context for the task")

    mode = subparsers.add_parser("mode", help="Switch agent mode")
    mode.add_argument("mode", help="Mode: architect, worker, intern")

    subparsers.add_parser("status", help="Show agent status")
    subparsers.add_parser("skills", help="List available skills")
    subparsers.add_parser("config", help="Show configuration")

    run = subparsers.add_parser("run", help="Run a skill script directly")
    run.add_argument("skill", help="Skill name")
    run.add_argument("script", nargs="?", help="Script name without extension (default: validate)")
    run.add_argument("--watch", action="store_true", help="Watch for changes")

    hook = subparsers.add_parser("hook", help="Process lifecycle event JSON from stdin")
    hook.add_argument("--worktree", default=".", help="Repository root holding .beads/")

    return parser


def main(argv: Optional[List[str]] = None, config: Optional[Settings] = None) -> int:
    """Main entry point for command-line usage."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config or settings

    configure_logging(debug=args.verbose or config.debug)

    command = COMMANDS[args.command]
    try:
        if inspect.iscoroutinefunction(command):
            return asyncio.run(command(args, config))
        return command(args, config)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
