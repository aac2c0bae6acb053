"""
Test fixtures for the tutorcore test suite.
"""

import os
import sys
from pathlib import Path

import pytest

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BACKEND_DIR))

# Use the example profile so tests never read a developer's profile.yaml
os.environ["TUTORCORE_PROFILE_PATH"] = str(BACKEND_DIR.parent / "profile.yaml.example")

from tutorcore.agents import AgentRegistry, builtin_templates  # noqa: E402
from tutorcore.inference.models import ModelDescriptor, Specialization  # noqa: E402
from tutorcore.profile import Profile, SessionsConfig  # noqa: E402
from tutorcore.tools import RegistryToolExecutor, ToolRegistry, register_default_tools  # noqa: E402


class FakeClock:
    """Manually advanced clock for timeout tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def profile():
    """Default profile, independent of any file on disk."""
    return Profile()


@pytest.fixture
def tool_registry():
    registry = ToolRegistry()
    register_default_tools(registry)
    return registry


@pytest.fixture
def agent_registry(tool_registry):
    registry = AgentRegistry(tool_registry)
    for template in builtin_templates():
        registry.register(template)
    return registry


@pytest.fixture
def tool_executor(tool_registry):
    return RegistryToolExecutor(tool_registry)


@pytest.fixture
def session_store(agent_registry, clock):
    from tutorcore.orchestration.session import SessionStore
    return SessionStore(agent_registry, SessionsConfig(), clock=clock)


def make_model(name="m", type_="llama", specialization="chat",
               max_context_length=4096, **perf):
    descriptor = ModelDescriptor(
        name=name,
        type=type_,
        specialization=Specialization(specialization),
        max_context_length=max_context_length,
    )
    for key, value in perf.items():
        setattr(descriptor.performance, key, value)
    return descriptor
