"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
API keys are read here and injected into backend constructors; nothing
below the infra layer touches the environment.
"""

import os
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Optional

from inference import ChatCompletionsBackend, MessagesBackend, ModelBackend, StubModelBackend
from inference.chat_completions import CHAT_COMPLETIONS_URL, DEFAULT_CHAT_MODEL
from inference.http_backend import DEFAULT_TIMEOUT_S
from inference.messages import DEFAULT_ANTHROPIC_VERSION, DEFAULT_MESSAGES_MODEL, MESSAGES_URL


LLMProviderType = Literal["chatgpt", "claude", "stub"]

DEFAULT_PROVIDER: LLMProviderType = "chatgpt"

# Accepted spellings -> canonical provider
_PROVIDER_ALIASES: Dict[str, LLMProviderType] = {
    "chatgpt": "chatgpt",
    "openai": "chatgpt",
    "claude": "claude",
    "anthropic": "claude",
    "stub": "stub",
}


class ConfigurationError(Exception):
    """Configuration is missing a value required by the selected backend."""


def resolve_provider(name: Optional[str]) -> LLMProviderType:
    """Map a configured provider name onto a registry key. Unknown or empty -> chatgpt."""
    if not name:
        return DEFAULT_PROVIDER
    return _PROVIDER_ALIASES.get(name.strip().lower(), DEFAULT_PROVIDER)


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    llm_provider: LLMProviderType

    # ChatGPT (chat-completions wire format)
    openai_api_key: Optional[str]
    openai_model: str
    openai_url: str

    # Claude (messages wire format)
    claude_api_key: Optional[str]
    claude_model: str
    claude_url: str
    anthropic_version: str

    llm_timeout_s: float

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - LLM_PROVIDER: chatgpt
        - OPENAI_MODEL: gpt-4
        - CLAUDE_MODEL: claude-3-5-sonnet-20241022
        - LLM_TIMEOUT_S: 60
        """
        return cls(
            llm_provider=resolve_provider(os.getenv("LLM_PROVIDER")),

            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", DEFAULT_CHAT_MODEL),
            openai_url=os.getenv("OPENAI_API_URL", CHAT_COMPLETIONS_URL),

            claude_api_key=os.getenv("CLAUDE_API_KEY") or os.getenv("ANTHROPIC_API_KEY") or None,
            claude_model=os.getenv("CLAUDE_MODEL", DEFAULT_MESSAGES_MODEL),
            claude_url=os.getenv("CLAUDE_API_URL", MESSAGES_URL),
            anthropic_version=os.getenv("ANTHROPIC_VERSION", DEFAULT_ANTHROPIC_VERSION),

            llm_timeout_s=float(os.getenv("LLM_TIMEOUT_S", str(DEFAULT_TIMEOUT_S))),
        )

    def create_llm_backend(self) -> ModelBackend:
        """Create LLM backend instance based on configuration."""
        factory = _BACKEND_REGISTRY.get(resolve_provider(self.llm_provider), _create_chatgpt)
        return factory(self)


def _create_chatgpt(config: InfraConfig) -> ModelBackend:
    if not config.openai_api_key:
        raise ConfigurationError("OpenAI API key not configured (set OPENAI_API_KEY)")
    return ChatCompletionsBackend(
        api_key=config.openai_api_key,
        model=config.openai_model,
        endpoint=config.openai_url,
        timeout=config.llm_timeout_s,
    )


def _create_claude(config: InfraConfig) -> ModelBackend:
    if not config.claude_api_key:
        raise ConfigurationError("Claude API key not configured (set CLAUDE_API_KEY)")
    return MessagesBackend(
        api_key=config.claude_api_key,
        model=config.claude_model,
        endpoint=config.claude_url,
        timeout=config.llm_timeout_s,
        api_version=config.anthropic_version,
    )


def _create_stub(config: InfraConfig) -> ModelBackend:
    return StubModelBackend()


_BACKEND_REGISTRY: Dict[str, Callable[[InfraConfig], ModelBackend]] = {
    "chatgpt": _create_chatgpt,
    "claude": _create_claude,
    "stub": _create_stub,
}


def get_config() -> InfraConfig:
    """Get global infrastructure configuration."""
    return InfraConfig.from_env()
