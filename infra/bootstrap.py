"""
Infrastructure initialization and bootstrap.

Singleton pattern for creating the model backend and the components that
share it from configuration.
"""

from typing import Optional

from inference import ModelBackend
from orchestration import PlanBuilder, TaskRunner

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Singleton pattern - single instance per process. PlanBuilder and
    TaskRunner share one backend instance.
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None, backend: Optional[ModelBackend] = None):
        """Initialize bootstrap with configuration (or an explicit backend)."""
        self.config = config or get_config()
        self.llm_backend = backend or self.config.create_llm_backend()
        self.plan_builder = PlanBuilder(self.llm_backend)
        self.task_runner = TaskRunner(self.llm_backend)

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton InfraBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_llm_backend(self) -> ModelBackend:
        """Get LLM backend."""
        return self.llm_backend

    def get_plan_builder(self) -> PlanBuilder:
        return self.plan_builder

    def get_task_runner(self) -> TaskRunner:
        return self.task_runner


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """Create (or return) the process-wide bootstrap."""
    return InfraBootstrap.get_instance(config)
