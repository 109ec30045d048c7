"""
Plan creation and execution on top of the inference boundary.

    from inference import StubModelBackend
    from orchestration import PlanBuilder, TaskRunner

    backend = StubModelBackend()
    plan = await PlanBuilder(backend).create_plan("Build a todo app")
    plan = await TaskRunner(backend).execute_plan(plan)
"""

from .errors import (
    InvalidTransitionError,
    OrchestrationError,
    PlanParseError,
    ProviderError,
    TaskExecutionError,
    ValidationError,
)
from .models import NOT_APPLICABLE, Plan, PlanStatus, Task, TaskStatus
from .plan_parser import PlanDraft, TaskDraft, parse_plan_reply, strip_code_fence
from .planner import PlanBuilder
from .task_runner import TaskRunner

__all__ = [
    "InvalidTransitionError",
    "OrchestrationError",
    "PlanParseError",
    "ProviderError",
    "TaskExecutionError",
    "ValidationError",
    "NOT_APPLICABLE",
    "Plan",
    "PlanStatus",
    "Task",
    "TaskStatus",
    "PlanDraft",
    "TaskDraft",
    "parse_plan_reply",
    "strip_code_fence",
    "PlanBuilder",
    "TaskRunner",
]
