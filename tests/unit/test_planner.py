"""
Tests for PlanBuilder.create_plan.

Verifies:
✔ Empty goal rejected before the backend is called
✔ Request carries the planner contract, goal, tech stack, temperature and token limit
✔ Backend failure -> ProviderError, no plan
✔ Prose / empty task list -> PlanParseError containing the reply
✔ Tasks sorted by order (stable), non-positive orders replaced by position
✔ Plan fields: status created, goal, tech stack or "N/A", description, fresh ids
"""

import pytest

from inference import GenerationResult, StubModelBackend
from orchestration import (
    NOT_APPLICABLE,
    PlanBuilder,
    PlanParseError,
    PlanStatus,
    ProviderError,
    TaskStatus,
    ValidationError,
)
from orchestration.prompting import PLAN_MAX_TOKENS, PLANNER_SYSTEM_PROMPT


def task_entry(title, order, **extra):
    return {"title": title, "description": f"{title} details", "order": order, **extra}


class TestGoalValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("goal", ["", "   ", "\n\t", None])
    async def test_blank_goal_rejected_without_backend_call(self, goal):
        backend = StubModelBackend()

        with pytest.raises(ValidationError):
            await PlanBuilder(backend).create_plan(goal)

        assert backend.requests == []

    def test_backend_required(self):
        with pytest.raises(ValueError):
            PlanBuilder(None)


class TestPlanRequest:
    @pytest.mark.asyncio
    async def test_request_shape(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(task_entry("A", 1))])

        await PlanBuilder(backend).create_plan("Build a todo app", tech_stack="React")

        request = backend.requests[0]
        assert request.system_message == PLANNER_SYSTEM_PROMPT
        assert request.temperature == 0.7
        assert request.max_tokens == PLAN_MAX_TOKENS
        assert "Build a todo app" in request.prompt
        assert "React" in request.prompt

    @pytest.mark.asyncio
    async def test_tech_stack_omitted_from_prompt_when_absent(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(task_entry("A", 1))])

        await PlanBuilder(backend).create_plan("Build a todo app")

        assert "Tech Stack" not in backend.requests[0].prompt


class TestPlanFailures:
    @pytest.mark.asyncio
    async def test_backend_failure_raises_provider_error(self):
        failure = GenerationResult.failed(model="m", error_message="Error calling ChatGPT: HTTP 500")
        backend = StubModelBackend(replies=[failure])

        with pytest.raises(ProviderError) as exc_info:
            await PlanBuilder(backend).create_plan("Build a todo app")

        assert "HTTP 500" in str(exc_info.value)
        assert exc_info.value.diagnostic == "Error calling ChatGPT: HTTP 500"
        assert exc_info.value.provider == "Stub"

    @pytest.mark.asyncio
    async def test_prose_reply_raises_parse_error(self):
        prose = "Sure! First, create a repo. Then, add a list component."
        backend = StubModelBackend(replies=[prose])

        with pytest.raises(PlanParseError) as exc_info:
            await PlanBuilder(backend).create_plan("Build a todo app")

        assert prose in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_empty_task_list_raises_parse_error(self, plan_reply):
        reply = plan_reply(description="nothing to do")
        backend = StubModelBackend(replies=[reply])

        with pytest.raises(PlanParseError) as exc_info:
            await PlanBuilder(backend).create_plan("Build a todo app")

        assert reply in str(exc_info.value)


class TestPlanMaterialization:
    @pytest.mark.asyncio
    async def test_fenced_reply_sorted_by_order(self, plan_reply):
        reply = "```json\n" + plan_reply(
            task_entry("Second", 2),
            task_entry("First", 1),
            task_entry("Third", 3),
        ) + "\n```"
        backend = StubModelBackend(replies=[reply])

        plan = await PlanBuilder(backend).create_plan("Build a todo app")

        assert [t.title for t in plan.tasks] == ["First", "Second", "Third"]
        assert [t.order for t in plan.tasks] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_equal_orders_keep_reply_sequence(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(
            task_entry("B1", 2),
            task_entry("A", 1),
            task_entry("B2", 2),
            task_entry("B3", 2),
        )])

        plan = await PlanBuilder(backend).create_plan("goal")

        assert [t.title for t in plan.tasks] == ["A", "B1", "B2", "B3"]

    @pytest.mark.asyncio
    async def test_non_positive_order_uses_position(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(
            task_entry("pos1", 0),
            task_entry("pos2", 10),
            task_entry("pos3", -4),
            {"title": "pos4", "description": "no order"},
        )])

        plan = await PlanBuilder(backend).create_plan("goal")

        orders = {t.title: t.order for t in plan.tasks}
        assert orders == {"pos1": 1, "pos2": 10, "pos3": 3, "pos4": 4}
        assert [t.title for t in plan.tasks] == ["pos1", "pos3", "pos4", "pos2"]

    @pytest.mark.asyncio
    async def test_replaced_order_may_collide_with_declared(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(
            task_entry("declared", 2),
            task_entry("replaced", 0),
        )])

        plan = await PlanBuilder(backend).create_plan("goal")

        assert [(t.title, t.order) for t in plan.tasks] == [("declared", 2), ("replaced", 2)]

    @pytest.mark.asyncio
    async def test_commands_copied(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(
            task_entry("Setup", 1, preCommand="mkdir app", command="npm init -y", postCommand="npm test"),
        )])

        plan = await PlanBuilder(backend).create_plan("goal")
        task = plan.tasks[0]

        assert task.commands == ["mkdir app", "npm init -y"]
        assert task.post_command == "npm test"

    @pytest.mark.asyncio
    async def test_plan_fields(self, plan_reply):
        backend = StubModelBackend(replies=[plan_reply(task_entry("A", 1), task_entry("B", 2), description="Todo plan")])

        plan = await PlanBuilder(backend).create_plan("  Build a todo app  ", tech_stack=" Vue ")

        assert plan.status == PlanStatus.CREATED
        assert plan.goal == "Build a todo app"
        assert plan.tech_stack == "Vue"
        assert plan.description == "Todo plan"
        assert plan.started_at is None
        assert all(t.status == TaskStatus.PENDING for t in plan.tasks)
        assert len({t.id for t in plan.tasks}) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tech_stack", [None, "", "   "])
    async def test_planning_only_marks_tech_stack_not_applicable(self, plan_reply, tech_stack):
        backend = StubModelBackend(replies=[plan_reply(task_entry("A", 1))])

        plan = await PlanBuilder(backend).create_plan("goal", tech_stack=tech_stack)

        assert plan.tech_stack == NOT_APPLICABLE

    @pytest.mark.asyncio
    async def test_default_stub_plan(self):
        plan = await PlanBuilder(StubModelBackend()).create_plan("Build a todo app")

        assert len(plan.tasks) == 3
        assert plan.tasks[0].commands == ["git init"]
        assert plan.tasks[2].post_command == "echo done"
