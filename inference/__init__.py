"""
Model boundary layer for LLM inference.

This package provides a clean abstraction for model invocation,
allowing the planner and runner to remain agnostic of the vendor.

Supported backends:
- ChatCompletionsBackend: OpenAI chat-completions wire format
- MessagesBackend: Anthropic messages wire format
- StubModelBackend: Deterministic fake model (default for CI/tests)

Example usage:
    from inference import StubModelBackend, GenerationRequest

    backend = StubModelBackend()
    request = GenerationRequest(prompt="Hello, world!")
    result = await backend.send(request)
"""

from .types import GenerationRequest, GenerationResult
from .base import ModelBackend
from .http_backend import HTTPModelBackend
from .chat_completions import ChatCompletionsBackend
from .messages import MessagesBackend
from .stub import StubModelBackend

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "ModelBackend",
    "HTTPModelBackend",
    "ChatCompletionsBackend",
    "MessagesBackend",
    "StubModelBackend",
]
