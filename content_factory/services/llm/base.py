"""
Base classes for LLM providers

Defines the abstract interface that all LLM providers must implement.
Stage handlers only ever see `LLMProvider.generate`: send a system prompt and
a user prompt, get back text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ProviderType(str, Enum):
    """Supported LLM providers"""
    OPENAI = "openai"
    COZE = "coze"
    OLLAMA = "ollama"


@dataclass
class LLMConfig:
    """Configuration for an LLM request"""
    model: Optional[str] = None  # None -> provider default
    temperature: float = 0.7
    json_mode: bool = True  # ask the backend for a JSON object response


@dataclass
class UsageStats:
    """Token usage statistics"""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.input_tokens + self.output_tokens


@dataclass
class LLMResponse:
    """Unified response from any LLM provider"""
    text: str
    model: str
    provider: ProviderType
    usage: Optional[UsageStats] = None
    raw_response: Any = None  # Original payload from the provider


class LLMProvider(ABC):
    """Abstract base class for LLM providers

    Implementations must surface every backend failure (transport error,
    non-success status, backend-reported failure, timeout, empty content)
    as `GenerationError`. No retry is performed at this layer.
    """

    provider_type: ProviderType

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Generate a response from the LLM

        Args:
            system_prompt: Fixed per-stage instruction
            user_prompt: Rendered upstream context
            config: Generation options

        Returns:
            LLMResponse with the generated text and metadata

        Raises:
            GenerationError: If the backend call fails for any reason
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is properly configured"""

    @property
    def name(self) -> str:
        """Get the provider name"""
        return self.provider_type.value
