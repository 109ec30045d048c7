"""
Configuration management for the plan orchestrator.

Loads environment variables from .env file and provides typed access to
process-level settings. Provider credentials are read by infra.config.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def is_valid_log_level(level: str) -> bool:
    return isinstance(logging.getLevelName((level or "").upper()), int)


class Config:
    """Configuration class for the orchestrator drivers."""

    # LLM provider (chatgpt | claude | stub)
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "chatgpt")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # HTTP API
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8000"))

    @classmethod
    def validate(cls) -> bool:
        """Validate that process-level settings are usable."""
        if not is_valid_log_level(cls.LOG_LEVEL):
            print(f"⚠️  Unknown LOG_LEVEL: {cls.LOG_LEVEL}")
            return False
        return True


def configure_logging(level: str = None) -> None:
    """Configure root logging once for a driver process."""
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  LLM Provider: {Config.LLM_PROVIDER}")
    print(f"  Log Level: {Config.LOG_LEVEL}")
    print(f"  API: {Config.API_HOST}:{Config.API_PORT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
