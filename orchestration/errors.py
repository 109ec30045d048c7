"""
Error taxonomy for plan creation and execution.

- ValidationError:        bad caller input, raised before any backend call
- ProviderError:          the backend reported failure (never raised BY a backend)
- PlanParseError:         the model reply could not be turned into a plan
- TaskExecutionError:     a single task could not be resolved; captured on the task
- InvalidTransitionError: a lifecycle method was called in the wrong state
"""

from typing import Optional


class OrchestrationError(Exception):
    """Base class for all orchestration errors."""


class ValidationError(OrchestrationError):
    """Required input is missing or empty."""


class ProviderError(OrchestrationError):
    """The model backend returned a failed result."""

    def __init__(self, message: str, provider: Optional[str] = None, diagnostic: Optional[str] = None):
        super().__init__(message)
        self.provider = provider
        self.diagnostic = diagnostic


class PlanParseError(OrchestrationError):
    """The model reply is not a valid plan. Keeps the raw reply for debugging."""

    def __init__(self, message: str, raw_reply: str):
        super().__init__(message)
        self.raw_reply = raw_reply


class TaskExecutionError(OrchestrationError):
    """A task could not be resolved."""

    def __init__(self, message: str, task_id: Optional[str] = None):
        super().__init__(message)
        self.task_id = task_id


class InvalidTransitionError(OrchestrationError):
    """A task or plan lifecycle transition is not allowed from its current state."""
