"""
Command-line entry point.

Interactive workflow:
  goal -> (tech stack) -> plan -> confirmation -> execution -> results

Run:
  python main.py "Build a todo app" --tech-stack "React, FastAPI"
  python main.py --plan-only --json
"""

import argparse
import asyncio
import signal
import sys
from typing import Callable, List, Optional, TextIO

from config import LOG_LEVELS, Config, configure_logging, is_valid_log_level
from infra import ConfigurationError, InfraBootstrap, InfraConfig, resolve_provider
from orchestration import OrchestrationError, PlanStatus
from orchestration.rendering import RULE, format_plan, format_results, plan_to_json

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_TASK_FAILURES = 2

_CONFIRM_ANSWERS = ("yes", "y")

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn a goal into an ordered plan and execute it")
    parser.add_argument("goal", nargs="?", help="What you want to build (prompted if omitted)")
    parser.add_argument("--tech-stack", help="Technologies to plan for, e.g. 'Python, React'")
    parser.add_argument("--plan-only", action="store_true", help="Create the plan without executing it")
    parser.add_argument("--yes", "-y", action="store_true", help="Execute without asking for confirmation")
    parser.add_argument("--json", action="store_true", help="Print the plan as a JSON document")
    parser.add_argument("--provider", help="LLM provider: chatgpt | claude | stub (overrides LLM_PROVIDER)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=Config.LOG_LEVEL,
        help="Logging level (defaults to LOG_LEVEL)",
    )
    return parser


def _ask(message: str, input_fn: InputFn, prompt_stream: Optional[TextIO] = None) -> str:
    """Read one answer. With prompt_stream set the prompt is written there instead of stdout."""
    prompt = f"{message}\n➤ "
    try:
        if prompt_stream is not None:
            print(prompt, end="", file=prompt_stream, flush=True)
            return (input_fn("") or "").strip()
        return (input_fn(prompt) or "").strip()
    except EOFError:
        return ""


def _print_stderr(text: str) -> None:
    print(text, file=sys.stderr)


def _install_cancel_handler(cancel_event: asyncio.Event) -> bool:
    """Ctrl+C stops the run at the next task boundary."""
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, cancel_event.set)
        return True
    except (NotImplementedError, RuntimeError):
        return False


def _remove_cancel_handler() -> None:
    asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)


async def run_workflow(
    args: argparse.Namespace,
    bootstrap: InfraBootstrap,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> int:
    """Drive one goal through planning and (optionally) execution. Returns an exit code."""
    # JSON mode keeps stdout a single parseable document; prompts and notices go to stderr
    prompt_stream = sys.stderr if args.json else None
    notify = _print_stderr if args.json else output

    if not args.json:
        output(f"🤖 Using AI Provider: {bootstrap.get_llm_backend().provider_name}\n")

    goal = (args.goal or "").strip() or _ask("Please describe your goal:", input_fn, prompt_stream)
    if not goal:
        notify("❌ Goal cannot be empty!")
        return EXIT_ERROR

    # Planning-only mode never prompts; the plan records "N/A" unless a flag was given
    tech_stack = (args.tech_stack or "").strip()
    if not tech_stack and not args.plan_only:
        tech_stack = _ask(
            "Please specify your tech stack (optional, press Enter to skip):", input_fn, prompt_stream
        )

    if not args.json:
        output(f"\n{RULE}\n📋 Creating Plan...\n{RULE}\n")

    try:
        plan = await bootstrap.get_plan_builder().create_plan(goal, tech_stack or None)
    except OrchestrationError as e:
        notify(f"❌ Failed to create plan: {e}")
        return EXIT_ERROR

    if args.plan_only:
        output(plan_to_json(plan) if args.json else format_plan(plan))
        return EXIT_OK

    if not args.json:
        output(format_plan(plan))

    if not args.yes:
        answer = _ask("Would you like to execute this plan? (yes/no):", input_fn, prompt_stream)
        if answer.lower() not in _CONFIRM_ANSWERS:
            notify("❌ Execution cancelled by user.")
            return EXIT_OK

    if not args.json:
        output(f"\n{RULE}\n🚀 Executing Tasks...\n{RULE}\n")

    cancel_event = asyncio.Event()
    handler_installed = _install_cancel_handler(cancel_event)
    try:
        await bootstrap.get_task_runner().execute_plan(plan, cancel_event)
    finally:
        if handler_installed:
            _remove_cancel_handler()

    output(plan_to_json(plan) if args.json else format_results(plan))
    return EXIT_OK if plan.status == PlanStatus.COMPLETED else EXIT_TASK_FAILURES


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not is_valid_log_level(args.log_level):
        print(f"❌ Unknown log level: {args.log_level} (expected one of {', '.join(LOG_LEVELS)})", file=sys.stderr)
        return EXIT_ERROR
    configure_logging(args.log_level)

    config = InfraConfig.from_env()
    if args.provider:
        config.llm_provider = resolve_provider(args.provider)

    try:
        bootstrap = InfraBootstrap.get_instance(config)
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return asyncio.run(run_workflow(args, bootstrap))


if __name__ == "__main__":
    sys.exit(main())
