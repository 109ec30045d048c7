"""
Prompt Builder layer for plan creation and task execution.

Exports the system prompt contracts and the user prompt assemblers.
"""

from .prompt_builder import (
    EXECUTOR_SYSTEM_PROMPT,
    PLAN_MAX_TOKENS,
    PLAN_TEMPERATURE,
    PLANNER_SYSTEM_PROMPT,
    TASK_MAX_TOKENS,
    TASK_TEMPERATURE,
    build_plan_prompt,
    build_task_prompt,
)

__all__ = [
    "EXECUTOR_SYSTEM_PROMPT",
    "PLAN_MAX_TOKENS",
    "PLAN_TEMPERATURE",
    "PLANNER_SYSTEM_PROMPT",
    "TASK_MAX_TOKENS",
    "TASK_TEMPERATURE",
    "build_plan_prompt",
    "build_task_prompt",
]
