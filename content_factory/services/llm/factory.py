"""
LLM Provider Factory

Creates and manages LLM provider instances based on configuration.
"""

from typing import Dict, Optional

from content_factory.config import LLMProviderType, get_active_provider

from .base import LLMProvider, ProviderType
from .coze_provider import CozeProvider
from .ollama_provider import OllamaProvider
from .openai_provider import OpenAIProvider


# Cache for provider instances
_provider_cache: Dict[ProviderType, LLMProvider] = {}


def get_default_provider_type() -> ProviderType:
    """Get the default provider type from environment

    Checks LLM_PROVIDER env var first, then auto-detects from the configured
    credentials (OpenAI, then Coze), otherwise falls back to Ollama.
    """
    active: LLMProviderType = get_active_provider()
    return ProviderType(active.value)


def get_llm_provider(
    provider_type: Optional[ProviderType] = None,
    use_cache: bool = True,
    **kwargs
) -> LLMProvider:
    """Get an LLM provider instance

    Args:
        provider_type: Specific provider to use. If None, uses default.
        use_cache: Whether to cache and reuse provider instances
        **kwargs: Provider-specific initialization options

    Returns:
        LLMProvider instance

    Raises:
        ValueError: If provider is not configured
    """
    if provider_type is None:
        provider_type = get_default_provider_type()

    if use_cache and provider_type in _provider_cache:
        return _provider_cache[provider_type]

    provider: LLMProvider

    if provider_type == ProviderType.OPENAI:
        provider = OpenAIProvider(**kwargs)
        if not provider.is_available():
            raise ValueError(
                "OpenAI provider is not available. "
                "Set OPENAI_API_KEY environment variable or choose another LLM_PROVIDER"
            )

    elif provider_type == ProviderType.COZE:
        provider = CozeProvider(**kwargs)
        if not provider.is_available():
            raise ValueError(
                "Coze provider is not available. "
                "Set COZE_API_KEY and COZE_BOT_ID environment variables or choose another LLM_PROVIDER"
            )

    elif provider_type == ProviderType.OLLAMA:
        provider = OllamaProvider(**kwargs)

    else:
        raise ValueError(f"Unknown provider type: {provider_type}")

    if use_cache:
        _provider_cache[provider_type] = provider

    return provider


def clear_provider_cache():
    """Clear the provider cache"""
    _provider_cache.clear()
