"""
Plain-data views of plans for drivers.

Nothing here prints; every function returns a dict or a string so the
CLI and the HTTP API can present the same plan in their own way.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import Plan, PlanStatus, Task, TaskStatus

RESULT_PREVIEW_LINES = 5
RULE = "═" * 55

_STATUS_ICONS = {
    TaskStatus.COMPLETED: "✅",
    TaskStatus.FAILED: "❌",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.PENDING: "⏸️",
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "commands": list(task.commands),
        "postCommand": task.post_command,
        "order": task.order,
        "status": task.status.value,
        "result": task.result,
        "errorMessage": task.error_message,
        "startedAt": _iso(task.started_at),
        "completedAt": _iso(task.completed_at),
    }


def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    """JSON-ready document for a plan, tasks in execution order."""
    return {
        "id": plan.id,
        "goal": plan.goal,
        "description": plan.description,
        "techStack": plan.tech_stack,
        "status": plan.status.value,
        "createdAt": _iso(plan.created_at),
        "startedAt": _iso(plan.started_at),
        "completedAt": _iso(plan.completed_at),
        "tasks": [task_to_dict(task) for task in plan.ordered_tasks()],
    }


def plan_to_json(plan: Plan, indent: int = 2) -> str:
    return json.dumps(plan_to_dict(plan), indent=indent, ensure_ascii=False)


def format_plan(plan: Plan) -> str:
    """Human-readable summary of a freshly created plan."""
    lines: List[str] = [
        f"📌 Goal: {plan.goal}",
        f"🔧 Tech Stack: {plan.tech_stack}",
        f"📄 Description: {plan.description}",
        f"📊 Total Tasks: {len(plan.tasks)}",
        "",
    ]

    for task in plan.ordered_tasks():
        lines.append(f"Task {task.order}: {task.title}")
        lines.append(f"  └─ {task.description}")
        for command in task.commands:
            lines.append(f"     $ {command}")
        if task.post_command:
            lines.append(f"     ✔ {task.post_command}")
        lines.append("")

    return "\n".join(lines)


def format_results(plan: Plan) -> str:
    """Human-readable execution report: per-task status, summary, duration."""
    lines: List[str] = [RULE, "📊 Execution Results", RULE, ""]

    for task in plan.ordered_tasks():
        icon = _STATUS_ICONS[task.status]
        lines.append(f"{icon} Task {task.order}: {task.title}")

        if task.result:
            result_lines = task.result.split("\n")
            lines.append("  Result:")
            lines.extend(f"    {line}" for line in result_lines[:RESULT_PREVIEW_LINES])
            if len(result_lines) > RESULT_PREVIEW_LINES:
                lines.append(f"    ... ({len(result_lines) - RESULT_PREVIEW_LINES} more lines)")

        if task.error_message:
            lines.append(f"  Error: {task.error_message}")

        lines.append("")

    completed = plan.count(TaskStatus.COMPLETED)
    failed = plan.count(TaskStatus.FAILED)
    lines.append(RULE)
    lines.append(
        f"📈 Summary: {completed} completed, {failed} failed "
        f"out of {len(plan.tasks)} total tasks"
    )

    if plan.status == PlanStatus.COMPLETED:
        lines.append("✅ Plan execution completed successfully!")
    else:
        lines.append("⚠️  Plan execution completed with some failures.")

    lines.append(f"⏱️  Total execution time: {plan.duration_seconds:.2f} seconds")
    return "\n".join(lines)
