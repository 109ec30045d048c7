"""
Chat-completions backend (OpenAI wire format).

Request:
    POST {model, messages: [{role, content}...], temperature, max_tokens}
    Authorization: Bearer <key>

Response:
    {choices: [{message: {content}}...], usage: {total_tokens}}
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .http_backend import DEFAULT_TIMEOUT_S, EmptyResponseError, HTTPModelBackend
from .types import GenerationRequest

CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_CHAT_MODEL = "gpt-4"


class ChatMessage(BaseModel):
    role: str = "assistant"
    content: Optional[str] = None


class ChatChoice(BaseModel):
    message: ChatMessage


class ChatUsage(BaseModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ChatCompletionResponse(BaseModel):
    choices: List[ChatChoice] = Field(default_factory=list)
    usage: Optional[ChatUsage] = None


class ChatCompletionsBackend(HTTPModelBackend):
    """
    Variant A: system + user message list, bearer-token auth.

    Usage:
        backend = ChatCompletionsBackend(api_key="sk-...", model="gpt-4")
        result = await backend.send(GenerationRequest(prompt="Hello"))
    """

    provider_name = "ChatGPT"
    endpoint = CHAT_COMPLETIONS_URL

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_CHAT_MODEL,
        endpoint: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        super().__init__(api_key=api_key, model=model, endpoint=endpoint, timeout=timeout)

    def _build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        messages = []
        if request.system_message:
            messages.append({"role": "system", "content": request.system_message})
        messages.append({"role": "user", "content": request.prompt})

        return {
            "model": self.model,
            "messages": messages,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

    def _build_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _parse_response(self, data: Any) -> Tuple[str, int]:
        parsed = ChatCompletionResponse.model_validate(data)
        if not parsed.choices or parsed.choices[0].message.content is None:
            raise EmptyResponseError()

        return parsed.choices[0].message.content, _count_tokens(parsed.usage)


def _count_tokens(usage: Optional[ChatUsage]) -> int:
    if usage is None:
        return 0
    if usage.total_tokens is not None:
        return usage.total_tokens
    return (usage.prompt_tokens or 0) + (usage.completion_tokens or 0)
