"""
PlanBuilder: goal text -> validated, ordered Plan.

Flow:
  1. validate goal (ValidationError before any backend call)
  2. send PLANNER_SYSTEM_PROMPT + goal prompt to the backend
  3. failed GenerationResult -> ProviderError
  4. parse reply (fence stripping, case-insensitive decode) -> PlanParseError
  5. materialize tasks, normalize non-positive orders to decode position
  6. stable sort by order, build Plan(status=created)
"""

import logging
from typing import List, Optional

from inference import GenerationRequest, ModelBackend

from .errors import ProviderError, ValidationError
from .models import NOT_APPLICABLE, Plan, Task
from .plan_parser import PlanDraft, parse_plan_reply
from .prompting import (
    PLAN_MAX_TOKENS,
    PLAN_TEMPERATURE,
    PLANNER_SYSTEM_PROMPT,
    build_plan_prompt,
)

logger = logging.getLogger(__name__)


class PlanBuilder:
    """
    Creates plans by prompting a model backend.

    Usage:
        builder = PlanBuilder(backend)
        plan = await builder.create_plan("Build a todo app", tech_stack="React")
    """

    def __init__(self, backend: ModelBackend):
        if backend is None:
            raise ValueError("backend is required")
        self.backend = backend

    async def create_plan(self, goal: str, tech_stack: Optional[str] = None) -> Plan:
        """
        Build a plan for goal.

        Args:
            goal: What the user wants to achieve. Must not be blank.
            tech_stack: Optional technology annotation. Blank or None means
                planning-only mode and the plan records "N/A".

        Raises:
            ValidationError: goal is empty after trimming
            ProviderError: the backend reported failure
            PlanParseError: the reply is not a usable plan
        """
        if goal is None or not goal.strip():
            raise ValidationError("Goal cannot be empty")

        goal = goal.strip()
        tech_stack = tech_stack.strip() if tech_stack and tech_stack.strip() else None

        request = GenerationRequest(
            prompt=build_plan_prompt(goal, tech_stack),
            system_message=PLANNER_SYSTEM_PROMPT,
            temperature=PLAN_TEMPERATURE,
            max_tokens=PLAN_MAX_TOKENS,
        )

        logger.info(f"Creating plan via {self.backend.provider_name}: {goal[:80]}")
        result = await self.backend.send(request)

        if not result.success:
            logger.warning(f"Plan creation failed: {result.error_message}")
            raise ProviderError(
                f"Failed to create plan: {result.error_message}",
                provider=self.backend.provider_name,
                diagnostic=result.error_message,
            )

        draft = parse_plan_reply(result.content)
        tasks = materialize_tasks(draft)

        plan = Plan(
            goal=goal,
            tech_stack=tech_stack or NOT_APPLICABLE,
            description=draft.description,
            tasks=tasks,
        )
        logger.info(
            f"Plan {plan.id} created with {len(tasks)} tasks "
            f"({result.tokens_used} tokens, model={result.model})"
        )
        return plan


def materialize_tasks(draft: PlanDraft) -> List[Task]:
    """
    Turn decoded entries into pending Tasks sorted by order.

    A declared order <= 0 is replaced by the entry's 1-based position in
    the reply. sorted() is stable, so equal orders keep reply sequence.

    Orders are not guaranteed unique: declared duplicates are kept, and a
    replaced order can collide with a declared one, so "Task N" labels in
    the drivers may repeat.
    """
    tasks = [
        Task(
            title=entry.title,
            description=entry.description,
            order=entry.order if entry.order > 0 else position,
            commands=entry.commands,
            post_command=entry.post_command,
        )
        for position, entry in enumerate(draft.tasks, start=1)
    ]
    return sorted(tasks, key=lambda task: task.order)
