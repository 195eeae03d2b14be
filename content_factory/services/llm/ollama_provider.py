"""
Ollama LLM Provider

Implementation of LLMProvider for local models via Ollama.
Supports models like qwen2.5, gemma3, llama, mistral, etc.
"""

from typing import Any, Dict, Optional

import httpx

from content_factory.config import DEFAULT_OLLAMA_MODEL, LLM_TIMEOUT_SECONDS, OLLAMA_HOST
from content_factory.core import GenerationError, get_logger

from .base import LLMConfig, LLMProvider, LLMResponse, ProviderType, UsageStats

logger = get_logger(__name__, component="llm_ollama")


class OllamaProvider(LLMProvider):
    """Ollama LLM Provider for local models

    Connects to a local or remote Ollama server. Used when no hosted
    backend is configured.
    """

    provider_type = ProviderType.OLLAMA

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = LLM_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Ollama provider

        Args:
            base_url: Ollama server URL. Defaults to OLLAMA_HOST env or http://localhost:11434
            model: Default model name
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.base_url = (base_url or OLLAMA_HOST).rstrip("/")
        self.default_model = model or DEFAULT_OLLAMA_MODEL
        self.timeout = timeout
        self._transport = transport

    def is_available(self) -> bool:
        # Reachability is checked lazily on the first call
        return bool(self.base_url)

    def _build_options(self, config: LLMConfig) -> Optional[Dict[str, Any]]:
        """Build Ollama-specific options"""
        options: Dict[str, Any] = {}

        if config.temperature is not None:
            options["temperature"] = config.temperature

        return options or None

    def _parse_response(self, data: Any, model: str) -> LLMResponse:
        """Parse Ollama API response"""
        if not isinstance(data, dict):
            raise GenerationError("Ollama returned a malformed response body")

        content = data.get("response")
        text = content.strip() if isinstance(content, str) else ""
        if not text:
            raise GenerationError("Empty response from Ollama")

        usage = None
        if "prompt_eval_count" in data or "eval_count" in data:
            usage = UsageStats(
                input_tokens=data.get("prompt_eval_count", 0),
                output_tokens=data.get("eval_count", 0),
            )

        return LLMResponse(
            text=text,
            model=model,
            provider=self.provider_type,
            usage=usage,
            raw_response=data,
        )

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        config = config or LLMConfig()
        model = config.model or self.default_model

        payload: Dict[str, Any] = {
            "model": model,
            "prompt": user_prompt,
            "stream": False,
        }
        if system_prompt:
            payload["system"] = system_prompt

        options = self._build_options(config)
        if options:
            payload["options"] = options

        if config.json_mode:
            payload["format"] = "json"

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/api/generate", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error("Ollama request failed", extra={"error": str(e), "model": model})
            raise GenerationError(f"Ollama request failed: {e}") from e
        except ValueError as e:
            raise GenerationError("Ollama returned a non-JSON body") from e

        return self._parse_response(data, model)
