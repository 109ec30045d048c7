from abc import ABC, abstractmethod

from .types import GenerationRequest, GenerationResult


class ModelBackend(ABC):
    """
    Abstract model boundary.
    Planner and runner code must depend ONLY on this interface.

    Contract:
    - send() never raises for network, HTTP or decode failures; it returns
      GenerationResult(success=False) with a readable error_message instead
    - asyncio cancellation is the only thing allowed to propagate
    - no per-call state is kept, so one instance can be reused sequentially
    """

    provider_name: str = "base"
    model: str = ""

    @abstractmethod
    async def send(self, request: GenerationRequest) -> GenerationResult:
        """Send a generation request to the model."""
        raise NotImplementedError
