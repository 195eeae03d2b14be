"""
LLM Service - Abstraction layer for Language Model providers

This module provides a unified interface for the text generation backends:
- OpenAI-compatible chat completions
- Coze bot API (poll or server-sent-event stream)
- Ollama (local models)

Usage:
    from content_factory.services.llm import get_llm_provider, LLMConfig

    llm = get_llm_provider()
    response = await llm.generate(system_prompt, user_prompt, LLMConfig(temperature=0.8))
    print(response.text)
"""

from .base import (
    LLMProvider,
    LLMResponse,
    LLMConfig,
    ProviderType,
    UsageStats,
)
from .factory import get_llm_provider, get_default_provider_type, clear_provider_cache
from .openai_provider import OpenAIProvider
from .coze_provider import CozeProvider
from .ollama_provider import OllamaProvider

__all__ = [
    # Base classes
    "LLMProvider",
    "LLMResponse",
    "LLMConfig",
    "ProviderType",
    "UsageStats",
    # Providers
    "OpenAIProvider",
    "CozeProvider",
    "OllamaProvider",
    # Factory
    "get_llm_provider",
    "get_default_provider_type",
    "clear_provider_cache",
]
