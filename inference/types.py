from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000


class GenerationRequest(BaseModel):
    """
    A single text-generation request.

    Invariants:
    - prompt is non-empty
    - temperature ∈ [0.0, 2.0]
    - max_tokens > 0
    - immutable once constructed
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1)
    system_message: Optional[str] = None
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a backend call.

    This is the only way a backend reports success or failure; backends
    never raise for network, HTTP status or decode problems.

    Invariants:
    - success is False  =>  content == ""
    - success is True   =>  error_message is None
    - tokens_used >= 0
    """

    content: str
    model: str
    tokens_used: int = 0
    success: bool = True
    error_message: Optional[str] = None

    def __post_init__(self):
        if self.tokens_used < 0:
            raise ValueError("tokens_used cannot be negative")
        if self.success and self.error_message is not None:
            raise ValueError("successful result cannot carry an error message")
        if not self.success and self.content:
            raise ValueError("failed result must have empty content")

    @classmethod
    def succeeded(cls, content: str, model: str, tokens_used: int = 0) -> "GenerationResult":
        return cls(content=content, model=model, tokens_used=max(tokens_used, 0), success=True)

    @classmethod
    def failed(cls, model: str, error_message: str) -> "GenerationResult":
        return cls(content="", model=model, tokens_used=0, success=False, error_message=error_message)
