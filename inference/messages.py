"""
Messages backend (Anthropic wire format).

Request:
    POST {model, max_tokens, temperature, system, messages: [{role: "user", content}]}
    x-api-key: <key>
    anthropic-version: <date>

Response:
    {content: [{type, text}...], usage: {input_tokens, output_tokens}}
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .http_backend import DEFAULT_TIMEOUT_S, EmptyResponseError, HTTPModelBackend
from .types import GenerationRequest

MESSAGES_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MESSAGES_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"


class ContentBlock(BaseModel):
    type: Optional[str] = None
    text: str


class MessagesUsage(BaseModel):
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


class MessagesResponse(BaseModel):
    content: List[ContentBlock] = Field(default_factory=list)
    usage: Optional[MessagesUsage] = None


class MessagesBackend(HTTPModelBackend):
    """
    Variant B: top-level system field, single user message,
    vendor API-key header plus protocol-version header.
    """

    provider_name = "Claude"
    endpoint = MESSAGES_URL

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MESSAGES_MODEL,
        endpoint: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        api_version: str = DEFAULT_ANTHROPIC_VERSION,
    ):
        super().__init__(api_key=api_key, model=model, endpoint=endpoint, timeout=timeout)
        self.api_version = api_version

    def _build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "system": request.system_message or "",
            "messages": [{"role": "user", "content": request.prompt}],
        }

    def _build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": self.api_version,
        }

    def _parse_response(self, data: Any) -> Tuple[str, int]:
        parsed = MessagesResponse.model_validate(data)
        if not parsed.content:
            raise EmptyResponseError()

        tokens = 0
        if parsed.usage is not None:
            tokens = (parsed.usage.input_tokens or 0) + (parsed.usage.output_tokens or 0)
        return parsed.content[0].text, tokens
