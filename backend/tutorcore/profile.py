"""
Profile System: loads profile.yaml and provides validated configuration.

The profile is the single source of truth for deployment settings: session
limits, the routable model list, executor tunables and logging.

Usage:
    from tutorcore.profile import get_profile
    profile = get_profile()
    print(profile.sessions.max_agents)
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from tutorcore.inference.models import Specialization

logger = logging.getLogger(__name__)

# ── Profile Path Resolution ──
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_DEFAULT_PROFILE_PATH = _PROJECT_ROOT / "profile.yaml"
_SPECIALIZATIONS = {s.value for s in Specialization}


# ── Dataclasses ──

@dataclass
class SessionsConfig:
    max_agents: int = 5
    max_tools: int = 10
    timeout_seconds: float = 300.0  # inactivity timeout
    history_cap: int = 100  # oldest messages evicted beyond this


@dataclass
class ExecutorConfig:
    step_cost_ms: int = 5000  # per-step duration estimate


@dataclass
class RoutingConfig:
    default_urgency: str = "normal"
    backend_url: str = ""  # OpenAI-compatible server; empty disables model invocation
    invoke_timeout_seconds: float = 60.0


@dataclass
class ModelConfig:
    name: str = ""
    type: str = "custom"  # llama | deepseek | qwen | gemini | custom
    version: str = "1.0"
    specialization: str = "chat"  # chat | reasoning | technical | creative | academic
    max_context_length: int = 4096
    endpoint: str = ""
    max_tokens: int = 4096
    temperature: float = 0.7
    top_p: float = 0.9
    is_active: bool = True


def _default_models() -> list[ModelConfig]:
    return [
        ModelConfig(name="llama-3-chat", type="llama", version="3.1",
                    specialization="chat", max_context_length=8192),
        ModelConfig(name="deepseek-reasoner", type="deepseek", version="r1",
                    specialization="reasoning", max_context_length=32768,
                    temperature=0.3),
        ModelConfig(name="qwen-coder", type="qwen", version="2.5",
                    specialization="technical", max_context_length=32768,
                    temperature=0.2),
        ModelConfig(name="gemini-pro", type="gemini", version="1.5",
                    specialization="creative", max_context_length=32768,
                    temperature=0.9),
        ModelConfig(name="llama-3-academic", type="llama", version="3.1",
                    specialization="academic", max_context_length=8192,
                    temperature=0.5),
    ]


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class Profile:
    sessions: SessionsConfig = field(default_factory=SessionsConfig)
    executor: ExecutorConfig = field(default_factory=ExecutorConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    models: list[ModelConfig] = field(default_factory=_default_models)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def get_model(self, name: str) -> Optional[ModelConfig]:
        """Get a model config by name."""
        for m in self.models:
            if m.name == name:
                return m
        return None


# ── Parsing ──

def _parse_dict(data: dict, cls, **overrides):
    """Create a dataclass instance from a dict, ignoring unknown keys."""
    field_names = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in field_names}
    filtered.update(overrides)
    return cls(**filtered)


def _load_profile_from_dict(raw: dict) -> Profile:
    """Parse a raw YAML dict into a Profile dataclass."""
    profile = Profile()

    if isinstance(raw.get("sessions"), dict):
        profile.sessions = _parse_dict(raw["sessions"], SessionsConfig)

    if isinstance(raw.get("executor"), dict):
        profile.executor = _parse_dict(raw["executor"], ExecutorConfig)

    if isinstance(raw.get("routing"), dict):
        profile.routing = _parse_dict(raw["routing"], RoutingConfig)

    if isinstance(raw.get("logging"), dict):
        profile.logging = _parse_dict(raw["logging"], LoggingConfig)

    if "models" in raw and isinstance(raw["models"], list):
        models = []
        for m in raw["models"]:
            if not isinstance(m, dict) or not m.get("name"):
                logger.warning("Skipping model entry without a name: %r", m)
                continue
            if m.get("specialization", "chat") not in _SPECIALIZATIONS:
                logger.warning("Skipping model %s with unknown specialization: %r",
                               m["name"], m.get("specialization"))
                continue
            models.append(_parse_dict(m, ModelConfig))
        profile.models = models

    return profile


def load_profile(path: Optional[Path] = None) -> Profile:
    """Load a profile from YAML. Falls back to defaults if the file is missing."""
    if path is None:
        env_path = os.environ.get("TUTORCORE_PROFILE_PATH")
        path = Path(env_path) if env_path else _DEFAULT_PROFILE_PATH
    path = Path(path)

    if not path.exists():
        logger.info("No profile at %s, using defaults", path)
        return Profile()

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        logger.warning("Profile at %s is not a mapping, using defaults", path)
        return Profile()

    profile = _load_profile_from_dict(raw)
    logger.info("Loaded profile from %s (%d models)", path, len(profile.models))
    return profile


# ── Singleton ──

_profile: Optional[Profile] = None


def get_profile() -> Profile:
    """Return the global Profile singleton. Loads on first call."""
    global _profile
    if _profile is None:
        _profile = load_profile()
    return _profile


def reset_profile():
    """Drop the cached profile so the next get_profile() re-reads it."""
    global _profile
    _profile = None
