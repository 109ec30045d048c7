"""
Plan reply parsing.

Models are told to answer with bare JSON but regularly wrap it in a
markdown fence, change the casing of keys, or answer with prose. This
module turns such a reply into a validated PlanDraft or raises
PlanParseError carrying the raw reply.

Steps:
  1. strip_code_fence(): take the inside of a ```json or ``` fence if any
  2. json.loads()
  3. fold keys case-insensitively onto the known schema
  4. validate with Pydantic; require at least one task
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import PlanParseError

JSON_FENCE = "```json"
FENCE = "```"

# lower-cased key -> schema field name
_PLAN_KEYS: Dict[str, str] = {
    "description": "description",
    "tasks": "tasks",
}
_TASK_KEYS: Dict[str, str] = {
    "title": "title",
    "description": "description",
    "order": "order",
    "precommand": "preCommand",
    "command": "command",
    "postcommand": "postCommand",
}


class TaskDraft(BaseModel):
    """One task entry as decoded from the model reply."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    order: int = 0
    pre_command: Optional[str] = Field(default=None, alias="preCommand")
    command: Optional[str] = None
    post_command: Optional[str] = Field(default=None, alias="postCommand")

    @field_validator("title", "description", mode="before")
    @classmethod
    def null_text_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("order", mode="before")
    @classmethod
    def null_order_is_unset(cls, v):
        return 0 if v is None else v

    @field_validator("pre_command", "command", "post_command")
    @classmethod
    def blank_command_is_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def commands(self) -> List[str]:
        return [c for c in (self.pre_command, self.command) if c]


class PlanDraft(BaseModel):
    """Decoded plan reply, before tasks are materialized."""

    description: str = ""
    tasks: List[TaskDraft] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def null_description_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("tasks", mode="before")
    @classmethod
    def null_tasks_is_empty(cls, v):
        return [] if v is None else v


def strip_code_fence(text: str) -> str:
    """
    Return the content of a markdown code fence, or the trimmed text.

    If ```json occurs, the content runs from the end of its first
    occurrence to the last ```. Otherwise the same is done with a generic
    ``` fence. When no closing fence follows the opening one the trimmed
    text is returned unchanged.
    """
    content = text.strip()

    for opening in (JSON_FENCE, FENCE):
        if opening not in content:
            continue
        start = content.index(opening) + len(opening)
        end = content.rfind(FENCE)
        if end > start:
            return content[start:end].strip()
        return content

    return content


def _fold_keys(obj: Dict[str, Any], known: Dict[str, str]) -> Dict[str, Any]:
    folded: Dict[str, Any] = {}
    for key, value in obj.items():
        name = known.get(str(key).lower())
        if name is not None:
            folded[name] = value
    return folded


def parse_plan_reply(raw_reply: str) -> PlanDraft:
    """
    Decode a model reply into a PlanDraft.

    Raises:
        PlanParseError: reply is not JSON, not a plan object, fails schema
            validation, or holds no tasks. The message ends with the raw,
            un-stripped reply.
    """
    content = strip_code_fence(raw_reply)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise PlanParseError(
            f"Failed to parse model reply as JSON: {e}. Response: {raw_reply}",
            raw_reply=raw_reply,
        ) from e

    if not isinstance(data, dict):
        raise PlanParseError(
            f"Expected a JSON object with a 'tasks' array, got {type(data).__name__}. "
            f"Response: {raw_reply}",
            raw_reply=raw_reply,
        )

    folded = _fold_keys(data, _PLAN_KEYS)
    tasks = folded.get("tasks")
    if isinstance(tasks, list):
        folded["tasks"] = [
            _fold_keys(entry, _TASK_KEYS) if isinstance(entry, dict) else entry
            for entry in tasks
        ]

    try:
        draft = PlanDraft.model_validate(folded)
    except ValidationError as e:
        raise PlanParseError(
            f"Model reply does not match the plan schema: {e}. Response: {raw_reply}",
            raw_reply=raw_reply,
        ) from e

    if not draft.tasks:
        raise PlanParseError(
            f"Invalid plan data received from model: no tasks. Response: {raw_reply}",
            raw_reply=raw_reply,
        )

    return draft
