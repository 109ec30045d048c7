"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from inference import StubModelBackend  # noqa: E402
from infra import InfraBootstrap  # noqa: E402


def _plan_reply(*tasks, description="A plan"):
    return json.dumps({"description": description, "tasks": list(tasks)})


@pytest.fixture
def plan_reply():
    """Builds a JSON plan reply as a model would send it."""
    return _plan_reply


@pytest.fixture
def stub_backend():
    return StubModelBackend()


@pytest.fixture(autouse=True)
def reset_bootstrap():
    """Keep the bootstrap singleton from leaking between tests."""
    InfraBootstrap.reset()
    yield
    InfraBootstrap.reset()
