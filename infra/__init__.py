"""
Infrastructure module exports.

Configuration, backend registry and bootstrap wiring.
"""

from .config import ConfigurationError, InfraConfig, LLMProviderType, get_config, resolve_provider
from .bootstrap import InfraBootstrap, bootstrap_infrastructure

__all__ = [
    "ConfigurationError",
    "InfraConfig",
    "LLMProviderType",
    "get_config",
    "resolve_provider",
    "InfraBootstrap",
    "bootstrap_infrastructure",
]
