"""
Model Configuration for Workflow Stages

Every stage of the content pipeline has its own generation settings, so the
temperature and response mode of each model call can be tuned in one place.

=== PROVIDER CONFIGURATION ===

Set LLM_PROVIDER environment variable to switch providers:
    - "openai" : OpenAI-compatible chat completions (requires OPENAI_API_KEY)
    - "coze"   : Coze bot API (requires COZE_API_KEY and COZE_BOT_ID)
    - "ollama" : Local Ollama server (default when nothing else is configured)

Coze supports two transport modes via COZE_MODE:
    - "poll"   : submit the chat, poll its status until completed/failed
    - "stream" : read the server-sent-event stream and keep the final answer

Ideation-heavy stages (copywriter titles, planning) run hotter (0.8) than
the analytical ones (0.7) to get more varied candidates.
"""

import os
from enum import Enum
from dataclasses import dataclass
from typing import Dict


class LLMProviderType(str, Enum):
    """Supported LLM providers"""
    OPENAI = "openai"
    COZE = "coze"
    OLLAMA = "ollama"


class CozeMode(str, Enum):
    """How the Coze backend delivers the final answer"""
    POLL = "poll"
    STREAM = "stream"


def get_active_provider() -> LLMProviderType:
    """Get the active LLM provider from environment

    Priority:
    1. Explicit LLM_PROVIDER env var
    2. OPENAI_API_KEY set -> OpenAI
    3. COZE_API_KEY and COZE_BOT_ID set -> Coze
    4. Default to Ollama (local)
    """
    provider_env = os.getenv("LLM_PROVIDER", "").strip().lower()

    for provider in LLMProviderType:
        if provider_env == provider.value:
            return provider

    if os.getenv("OPENAI_API_KEY"):
        return LLMProviderType.OPENAI

    if os.getenv("COZE_API_KEY") and os.getenv("COZE_BOT_ID"):
        return LLMProviderType.COZE

    return LLMProviderType.OLLAMA


def get_coze_mode() -> CozeMode:
    raw = os.getenv("COZE_MODE", "poll").strip().lower()
    return CozeMode.STREAM if raw == CozeMode.STREAM.value else CozeMode.POLL


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(float(raw), minimum)
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(int(raw), minimum)
    except (TypeError, ValueError):
        return default


# Backend settings
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
DEFAULT_OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")

COZE_BASE_URL = os.getenv("COZE_BASE_URL", "https://api.coze.com")
COZE_MAX_POLLS = _env_int("COZE_MAX_POLLS", 60)
COZE_POLL_INTERVAL_SECONDS = _env_float("COZE_POLL_INTERVAL_SECONDS", 1.0)

OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
DEFAULT_OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "qwen2.5:7b")

LLM_TIMEOUT_SECONDS = _env_float("LLM_TIMEOUT_SECONDS", 120.0, minimum=1.0)


@dataclass(frozen=True)
class StageModelConfig:
    """Generation settings for one model call in the workflow"""
    temperature: float = 0.7
    json_mode: bool = True
    description: str = ""


STAGE_MODELS: Dict[str, StageModelConfig] = {
    "mining": StageModelConfig(
        temperature=0.7,
        description="Mine 3-5 topics from the source text",
    ),
    "analysis": StageModelConfig(
        temperature=0.7,
        description="Five-step deep analysis of one topic",
    ),
    "director": StageModelConfig(
        temperature=0.7,
        description="Short-video editing plan",
    ),
    "copywriter_formulas": StageModelConfig(
        temperature=0.7,
        description="Recommend copy structure formulas",
    ),
    "copywriter_structure": StageModelConfig(
        temperature=0.7,
        description="Article skeleton for the chosen formula",
    ),
    "copywriter_titles": StageModelConfig(
        temperature=0.8,
        description="Headline candidates",
    ),
    "copywriter_content": StageModelConfig(
        temperature=0.7,
        json_mode=False,  # Markdown prose, not JSON
        description="Full article body",
    ),
    "planning": StageModelConfig(
        temperature=0.8,
        description="Branch out new topics",
    ),
}


def get_stage_config(stage_key: str) -> StageModelConfig:
    """Get generation settings for a stage key

    Raises:
        ValueError: If the stage key is unknown
    """
    try:
        return STAGE_MODELS[stage_key]
    except KeyError:
        raise ValueError(
            f"Unknown stage '{stage_key}'. Available: {', '.join(sorted(STAGE_MODELS))}"
        ) from None
