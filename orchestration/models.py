"""
Plan and task data model.

A Plan is the single owner of its Task list; tasks have no identity
outside the plan that created them.

Lifecycles:
    Task:  pending -> in_progress -> completed | failed
    Plan:  created -> in_progress -> completed | failed

Invariants:
- a plan always holds at least one task
- task order is a positive integer
- result is set only on completed tasks, error_message only on failed ones
- started_at / completed_at are each written once, started_at <= completed_at
- terminal states are final
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from .errors import InvalidTransitionError


NOT_APPLICABLE = "N/A"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class PlanStatus(str, Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


_TERMINAL_TASK_STATES = (TaskStatus.COMPLETED, TaskStatus.FAILED)
_TERMINAL_PLAN_STATES = (PlanStatus.COMPLETED, PlanStatus.FAILED)


@dataclass
class Task:
    """One unit of work within a plan."""

    title: str
    description: str
    order: int
    id: str = field(default_factory=new_id)
    commands: List[str] = field(default_factory=list)
    post_command: Optional[str] = None       # verification command

    status: TaskStatus = TaskStatus.PENDING
    result: Optional[str] = None
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        if self.order <= 0:
            raise ValueError(f"Task order must be positive, got {self.order}")

    @property
    def is_terminal(self) -> bool:
        return self.status in _TERMINAL_TASK_STATES

    def start(self) -> None:
        if self.status != TaskStatus.PENDING:
            raise InvalidTransitionError(f"Cannot start task in status {self.status.value}")
        self.status = TaskStatus.IN_PROGRESS
        self.started_at = utcnow()

    def complete(self, result: str) -> None:
        self._require_in_progress("complete")
        self.result = result
        self.status = TaskStatus.COMPLETED
        self.completed_at = self._end_timestamp()

    def fail(self, error_message: str) -> None:
        self._require_in_progress("fail")
        self.error_message = error_message
        self.status = TaskStatus.FAILED
        self.completed_at = self._end_timestamp()

    def _require_in_progress(self, action: str) -> None:
        if self.status != TaskStatus.IN_PROGRESS:
            raise InvalidTransitionError(f"Cannot {action} task in status {self.status.value}")

    def _end_timestamp(self) -> datetime:
        # Wall clock can step backwards; keep start <= complete
        now = utcnow()
        if self.started_at is not None and now < self.started_at:
            return self.started_at
        return now


@dataclass
class Plan:
    """An ordered collection of tasks addressing a goal."""

    goal: str
    description: str
    tasks: List[Task]
    tech_stack: str = NOT_APPLICABLE
    id: str = field(default_factory=new_id)

    status: PlanStatus = PlanStatus.CREATED
    created_at: datetime = field(default_factory=utcnow)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.tasks:
            raise ValueError("A plan must contain at least one task")

    @property
    def is_terminal(self) -> bool:
        return self.status in _TERMINAL_PLAN_STATES

    @property
    def all_completed(self) -> bool:
        return all(task.status == TaskStatus.COMPLETED for task in self.tasks)

    @property
    def duration_seconds(self) -> float:
        if self.started_at is None or self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def ordered_tasks(self) -> List[Task]:
        """Tasks by ascending order; equal orders keep list position."""
        return sorted(self.tasks, key=lambda task: task.order)

    def count(self, status: TaskStatus) -> int:
        return sum(1 for task in self.tasks if task.status == status)

    def start(self) -> None:
        if self.status != PlanStatus.CREATED:
            raise InvalidTransitionError(f"Cannot start plan in status {self.status.value}")
        self.status = PlanStatus.IN_PROGRESS
        self.started_at = utcnow()

    def finish(self, status: PlanStatus) -> None:
        if status not in _TERMINAL_PLAN_STATES:
            raise InvalidTransitionError(f"Cannot finish plan with status {status.value}")
        if self.status != PlanStatus.IN_PROGRESS:
            raise InvalidTransitionError(f"Cannot finish plan in status {self.status.value}")
        self.status = status
        now = utcnow()
        self.completed_at = self.started_at if self.started_at and now < self.started_at else now
