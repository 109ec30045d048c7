"""
TaskRunner: walks a plan one task at a time, asking the backend for
implementation guidance per task.

Execution policy:
- tasks run strictly sequentially in ascending order
- a failed task is logged and the run continues with the next one
- the cancel event is checked before each task; an in-flight call is
  never interrupted by it
- plan ends completed iff every task ended completed
"""

import asyncio
import logging
from typing import Optional

from inference import GenerationRequest, ModelBackend

from .errors import TaskExecutionError
from .models import Plan, PlanStatus, Task, TaskStatus
from .prompting import (
    EXECUTOR_SYSTEM_PROMPT,
    TASK_MAX_TOKENS,
    TASK_TEMPERATURE,
    build_task_prompt,
)

logger = logging.getLogger(__name__)


class TaskRunner:
    """Resolves tasks and plans against a model backend."""

    def __init__(self, backend: ModelBackend):
        if backend is None:
            raise ValueError("backend is required")
        self.backend = backend

    async def execute_task(self, task: Task) -> Task:
        """
        Run one pending task through its lifecycle.

        Never raises for backend or internal failures: they end up in
        task.error_message with status failed. Tasks that are not pending
        are returned untouched. asyncio cancellation marks the task failed
        and propagates.
        """
        if task.status != TaskStatus.PENDING:
            logger.warning(f"Task '{task.title}' is {task.status.value}, not re-running it")
            return task

        task.start()
        logger.info(f"Task {task.order} started: {task.title}")

        try:
            guidance = await self._resolve(task)
        except asyncio.CancelledError:
            task.fail("Task execution cancelled")
            raise
        except TaskExecutionError as e:
            task.fail(str(e))
        except Exception as e:
            task.fail(f"Task execution failed: {e}")
        else:
            task.complete(guidance)
            logger.info(f"Task {task.order} completed: {task.title}")
            return task

        logger.warning(f"Task {task.order} failed: {task.title}: {task.error_message}")
        return task

    async def _resolve(self, task: Task) -> str:
        request = GenerationRequest(
            prompt=build_task_prompt(task.title, task.description, task.commands, task.post_command),
            system_message=EXECUTOR_SYSTEM_PROMPT,
            temperature=TASK_TEMPERATURE,
            max_tokens=TASK_MAX_TOKENS,
        )

        result = await self.backend.send(request)
        if not result.success:
            raise TaskExecutionError(result.error_message or "Unknown backend error", task_id=task.id)
        return result.content

    async def execute_plan(self, plan: Plan, cancel_event: Optional[asyncio.Event] = None) -> Plan:
        """
        Execute every task of a created plan in ascending order.

        Args:
            plan: A plan in status created.
            cancel_event: Optional shared cancellation signal. When set, the
                run stops before the next task and the plan is marked failed;
                tasks not yet started stay pending.

        Returns:
            The same plan object, now completed or failed.
        """
        plan.start()
        logger.info(f"Executing plan {plan.id} ({len(plan.tasks)} tasks)")

        try:
            for task in plan.ordered_tasks():
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(
                        f"Plan {plan.id} cancelled before task {task.order}; "
                        f"{plan.count(TaskStatus.PENDING)} tasks left pending"
                    )
                    plan.finish(PlanStatus.FAILED)
                    return plan

                await self.execute_task(task)

                if task.status == TaskStatus.FAILED:
                    logger.warning(f"Task '{task.title}' failed, continuing with remaining tasks")

        except asyncio.CancelledError:
            plan.finish(PlanStatus.FAILED)
            raise

        plan.finish(PlanStatus.COMPLETED if plan.all_completed else PlanStatus.FAILED)
        logger.info(
            f"Plan {plan.id} {plan.status.value}: "
            f"{plan.count(TaskStatus.COMPLETED)} completed, "
            f"{plan.count(TaskStatus.FAILED)} failed"
        )
        return plan
