import json
from collections import deque
from typing import Iterable, List, Optional, Union

from .base import ModelBackend
from .types import GenerationRequest, GenerationResult

StubReply = Union[str, GenerationResult]

_STUB_PLAN = {
    "description": "Stubbed plan generated without a model.",
    "tasks": [
        {
            "title": "Set up the project",
            "description": "Create the project skeleton and install dependencies.",
            "order": 1,
            "command": "git init",
        },
        {
            "title": "Build the core feature",
            "description": "Implement the main feature described by the goal.",
            "order": 2,
        },
        {
            "title": "Verify the result",
            "description": "Run the checks that prove the goal is met.",
            "order": 3,
            "postCommand": "echo done",
        },
    ],
}


class StubModelBackend(ModelBackend):
    """
    Deterministic fake model for testing and CI.

    Scripted replies are returned in order; a reply can be plain text
    (turned into a successful result) or a ready GenerationResult, which
    is how tests inject failures. Once the script runs out the backend
    falls back to deterministic defaults:
    - planning requests (system message describing a "tasks" array)
      get a fixed three-task JSON plan
    - anything else gets a one-line guidance string

    Every request is recorded on self.requests for assertions.
    """

    provider_name = "Stub"

    def __init__(self, replies: Optional[Iterable[StubReply]] = None, model: str = "stub-model"):
        self.model = model
        self._replies = deque(replies or [])
        self.requests: List[GenerationRequest] = []

    async def send(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)

        if self._replies:
            reply = self._replies.popleft()
            if isinstance(reply, GenerationResult):
                return reply
            return GenerationResult.succeeded(content=reply, model=self.model)

        if request.system_message and '"tasks"' in request.system_message:
            return GenerationResult.succeeded(content=json.dumps(_STUB_PLAN), model=self.model)

        first_line = (request.prompt.strip().splitlines() or [""])[0]
        return GenerationResult.succeeded(
            content=f"Stub guidance for: {first_line}",
            model=self.model,
        )
