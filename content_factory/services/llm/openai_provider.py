"""
OpenAI LLM Provider

Implementation of LLMProvider for OpenAI-compatible chat completion APIs.
The base URL is configurable, so any server speaking the
`/chat/completions` protocol works.
"""

import os
from typing import Any, Dict, Optional

import httpx

from content_factory.config import DEFAULT_OPENAI_MODEL, LLM_TIMEOUT_SECONDS, OPENAI_BASE_URL
from content_factory.core import GenerationError, get_logger

from .base import LLMConfig, LLMProvider, LLMResponse, ProviderType, UsageStats

logger = get_logger(__name__, component="llm_openai")


class OpenAIProvider(LLMProvider):
    """Synchronous-completion backend: one POST returns the content directly"""

    provider_type = ProviderType.OPENAI

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = LLM_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize OpenAI provider

        Args:
            api_key: API key. Defaults to OPENAI_API_KEY env
            base_url: API root. Defaults to OPENAI_BASE_URL env
            model: Default model name
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY", "")
        self.base_url = (base_url or OPENAI_BASE_URL).rstrip("/")
        self.default_model = model or DEFAULT_OPENAI_MODEL
        self.timeout = timeout
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self.api_key)

    def _build_payload(self, system_prompt: str, user_prompt: str, config: LLMConfig) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": config.model or self.default_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": config.temperature,
        }
        if config.json_mode:
            payload["response_format"] = {"type": "json_object"}
        return payload

    def _parse_response(self, data: Any, model: str) -> LLMResponse:
        if not isinstance(data, dict):
            raise GenerationError("OpenAI returned a malformed response body")

        choices = data.get("choices")
        if choices is not None and not isinstance(choices, list):
            raise GenerationError("OpenAI returned malformed choices")
        choice = choices[0] if choices else {}
        message = choice.get("message") if isinstance(choice, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        text = content.strip() if isinstance(content, str) else ""
        if not text:
            raise GenerationError("Empty response from OpenAI")

        usage = None
        if isinstance(data.get("usage"), dict):
            usage = UsageStats(
                input_tokens=data["usage"].get("prompt_tokens") or 0,
                output_tokens=data["usage"].get("completion_tokens") or 0,
            )

        return LLMResponse(
            text=text,
            model=data.get("model", model),
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
        payload = self._build_payload(system_prompt, user_prompt, config)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Authorization": f"Bearer {self.api_key}"},
            ) as client:
                response = await client.post("/chat/completions", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "OpenAI returned an error status",
                extra={"status_code": e.response.status_code, "body": e.response.text[:500]},
            )
            raise GenerationError(f"OpenAI request failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("OpenAI request failed", extra={"error": str(e)})
            raise GenerationError(f"OpenAI request failed: {e}") from e
        except ValueError as e:
            raise GenerationError("OpenAI returned a non-JSON body") from e

        return self._parse_response(data, payload["model"])
