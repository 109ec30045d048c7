"""
Prompt Builder Layer
====================

Assembles the instruction and user prompts sent to the model backend.

Responsibilities:
- Defines the authoritative PLANNER_SYSTEM_PROMPT (plan JSON contract)
- Defines the EXECUTOR_SYSTEM_PROMPT (per-task guidance contract)
- Builds the user prompt for plan creation and for a single task

Invariants:
- PLANNER_SYSTEM_PROMPT spells out the exact JSON schema parsed by
  orchestration.plan_parser; the two must change together
- The planner reply must be JSON only; the parser still tolerates fences
- Tech stack is embedded only when provided
"""

from typing import List, Optional

# ── Generation settings ───────────────────────────────────────────────────────
PLAN_TEMPERATURE: float = 0.7
PLAN_MAX_TOKENS: int = 2000
TASK_TEMPERATURE: float = 0.7
TASK_MAX_TOKENS: int = 1500

# ── Planner contract ──────────────────────────────────────────────────────────
PLANNER_SYSTEM_PROMPT = """You are an expert project planning agent. Your job is to turn a user's goal into a detailed, ordered plan describing WHAT to build: features, screens, content, data and behaviour.

You must respond with a JSON object in the following format:
{
  "description": "Overall plan description",
  "tasks": [
    {
      "title": "Task title",
      "description": "Detailed description of the feature or content this task delivers",
      "order": 1,
      "preCommand": "Optional terminal command to run before the task",
      "command": "Optional terminal command that performs the task",
      "postCommand": "Optional terminal command that verifies the task"
    }
  ]
}

Important guidelines:
1. Break the goal down into clear, sequential tasks
2. Describe features and content in concrete detail (what the user sees and can do)
3. Use "order" to number tasks starting at 1
4. Include literal terminal commands only where they apply (setup, scaffolding, verification); omit the fields otherwise
5. Keep titles short and descriptions specific
6. Return ONLY valid JSON, no additional text, explanations or markdown"""

# ── Executor contract ─────────────────────────────────────────────────────────
EXECUTOR_SYSTEM_PROMPT = """You are a task execution agent. Your job is to provide detailed implementation guidance for the given task.

Provide:
1. Step-by-step implementation details
2. Code examples if applicable
3. Best practices and considerations
4. Expected outcomes

Be concise but thorough. Focus on actionable information."""


def build_plan_prompt(goal: str, tech_stack: Optional[str] = None) -> str:
    """
    Assemble the user prompt for plan creation.

    Args:
        goal: The user's goal, already validated as non-empty.
        tech_stack: Optional technology annotation; omitted from the prompt when None.

    Returns:
        Prompt string ready to pass as GenerationRequest.prompt.
    """
    parts: List[str] = [
        "Please create a detailed plan for the following goal:",
        f"**Goal:**\n{goal}",
    ]

    if tech_stack:
        parts.append(f"**Tech Stack:**\n{tech_stack}")

    parts.append(
        "Describe each feature and piece of content in enough detail that it "
        "can be built without further questions. Where setup or verification "
        "is needed, include the exact terminal commands."
    )

    return "\n\n".join(parts)


def build_task_prompt(
    title: str,
    description: str,
    commands: Optional[List[str]] = None,
    post_command: Optional[str] = None,
) -> str:
    """Assemble the user prompt asking for guidance on one task."""
    parts: List[str] = [
        "Execute the following task:",
        f"**Task:** {title}",
        f"**Description:** {description}",
    ]

    if commands:
        listed = "\n".join(f"- `{command}`" for command in commands)
        parts.append(f"**Commands:**\n{listed}")

    if post_command:
        parts.append(f"**Verification:** `{post_command}`")

    parts.append("Please provide detailed implementation guidance for completing this task.")

    return "\n\n".join(parts)
