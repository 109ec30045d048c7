"""
Tests for the prompt builder.
"""

from orchestration.prompting import (
    EXECUTOR_SYSTEM_PROMPT,
    PLANNER_SYSTEM_PROMPT,
    build_plan_prompt,
    build_task_prompt,
)


class TestPlannerContract:
    def test_schema_fields_named(self):
        for key in ('"description"', '"tasks"', '"title"', '"order"', '"preCommand"', '"command"', '"postCommand"'):
            assert key in PLANNER_SYSTEM_PROMPT

    def test_demands_json_only(self):
        assert "Return ONLY valid JSON" in PLANNER_SYSTEM_PROMPT

    def test_executor_prompt_is_not_a_planning_prompt(self):
        assert '"tasks"' not in EXECUTOR_SYSTEM_PROMPT


class TestBuildPlanPrompt:
    def test_goal_and_tech_stack(self):
        prompt = build_plan_prompt("Build a todo app", "React, FastAPI")

        assert "**Goal:**\nBuild a todo app" in prompt
        assert "**Tech Stack:**\nReact, FastAPI" in prompt

    def test_tech_stack_omitted(self):
        assert "Tech Stack" not in build_plan_prompt("Build a todo app")


class TestBuildTaskPrompt:
    def test_minimal(self):
        prompt = build_task_prompt("Login page", "Email + password form")

        assert prompt.startswith("Execute the following task:")
        assert "**Task:** Login page" in prompt
        assert "**Description:** Email + password form" in prompt
        assert "Commands" not in prompt
        assert "Verification" not in prompt

    def test_commands_and_verification(self):
        prompt = build_task_prompt("Setup", "Scaffold", ["mkdir app", "npm init -y"], "npm test")

        assert "- `mkdir app`\n- `npm init -y`" in prompt
        assert "**Verification:** `npm test`" in prompt
