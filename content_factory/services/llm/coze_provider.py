"""
Coze LLM Provider

Implementation of LLMProvider for a Coze bot. The bot API is asynchronous:
a chat is submitted and the answer becomes available later. Two ways of
collecting it are supported:

- poll:   POST /v3/chat, then GET /v3/chat/retrieve until the chat reaches
          a terminal status, then GET /v3/chat/message/list for the answer
- stream: POST /v3/chat with stream=true and read the server-sent events,
          keeping the last completed assistant answer

The bot carries its own system persona, so the system and user prompts are
sent together as a single user message.
"""

import asyncio
import json
import os
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

import httpx

from content_factory.config import (
    COZE_BASE_URL,
    COZE_MAX_POLLS,
    COZE_POLL_INTERVAL_SECONDS,
    LLM_TIMEOUT_SECONDS,
    CozeMode,
    get_coze_mode,
)
from content_factory.core import GenerationError, get_logger

from .base import LLMConfig, LLMProvider, LLMResponse, ProviderType

logger = get_logger(__name__, component="llm_coze")

STATUS_COMPLETED = "completed"
FAILED_STATUSES = {"failed", "canceled"}

EVENT_MESSAGE_DELTA = "conversation.message.delta"
EVENT_MESSAGE_COMPLETED = "conversation.message.completed"
EVENT_CHAT_FAILED = "conversation.chat.failed"
EVENT_ERROR = "error"
EVENT_DONE = "done"


def combine_prompts(system_prompt: str, user_prompt: str) -> str:
    if not system_prompt:
        return user_prompt
    return f"{system_prompt}\n\n{user_prompt}"


def _is_answer(message: Dict[str, Any]) -> bool:
    return message.get("role") == "assistant" and message.get("type") == "answer"


def _content(message: Dict[str, Any]) -> str:
    content = message.get("content")
    return content if isinstance(content, str) else ""


def _error_detail(payload: Dict[str, Any]) -> str:
    last_error = payload.get("last_error")
    if isinstance(last_error, dict) and last_error.get("msg"):
        return str(last_error["msg"])
    return str(payload.get("msg") or "no detail")


class CozeProvider(LLMProvider):
    """Coze bot backend with poll and stream modes"""

    provider_type = ProviderType.COZE

    def __init__(
        self,
        api_key: Optional[str] = None,
        bot_id: Optional[str] = None,
        base_url: Optional[str] = None,
        mode: Optional[CozeMode] = None,
        max_polls: int = COZE_MAX_POLLS,
        poll_interval: float = COZE_POLL_INTERVAL_SECONDS,
        timeout: float = LLM_TIMEOUT_SECONDS,
        user_id: str = "content_factory",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Coze provider

        Args:
            api_key: Personal access token. Defaults to COZE_API_KEY env
            bot_id: Bot to chat with. Defaults to COZE_BOT_ID env
            base_url: API root. Defaults to COZE_BASE_URL env
            mode: poll or stream. Defaults to COZE_MODE env
            max_polls: Status checks before giving up (poll mode)
            poll_interval: Seconds between status checks (poll mode)
            timeout: Per-request timeout in seconds
            user_id: Coze user id attached to each chat
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key or os.getenv("COZE_API_KEY", "")
        self.bot_id = bot_id or os.getenv("COZE_BOT_ID", "")
        self.base_url = (base_url or COZE_BASE_URL).rstrip("/")
        self.mode = mode or get_coze_mode()
        self.max_polls = max_polls
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.user_id = user_id
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self.api_key and self.bot_id)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    def _chat_payload(self, message: str, stream: bool) -> Dict[str, Any]:
        return {
            "bot_id": self.bot_id,
            "user_id": self.user_id,
            "stream": stream,
            "auto_save_history": True,
            "additional_messages": [
                {"role": "user", "content": message, "content_type": "text"},
            ],
        }

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        # Temperature and response format are configured on the bot itself
        message = combine_prompts(system_prompt, user_prompt)
        try:
            async with self._client() as client:
                if self.mode == CozeMode.STREAM:
                    text, raw = await self._chat_stream(client, message)
                else:
                    text, raw = await self._chat_poll(client, message)
        except httpx.HTTPError as e:
            logger.error("Coze request failed", extra={"error": str(e), "mode": self.mode.value})
            raise GenerationError(f"Coze request failed: {e}") from e

        text = text.strip()
        if not text:
            raise GenerationError("Empty response from Coze")

        return LLMResponse(
            text=text,
            model=self.bot_id,
            provider=self.provider_type,
            raw_response=raw,
        )

    # === Poll mode ===

    @staticmethod
    def _read_envelope(response: httpx.Response, action: str, expected: type = dict) -> Any:
        response.raise_for_status()
        try:
            body = response.json()
        except ValueError as e:
            raise GenerationError(f"Coze {action} returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise GenerationError(f"Coze {action} returned a malformed body")
        if body.get("code", 0) != 0:
            raise GenerationError(f"Coze {action} failed: {body.get('msg', 'unknown error')}")
        data = body.get("data")
        if data is None:
            raise GenerationError(f"Coze {action} returned no data")
        if not isinstance(data, expected):
            raise GenerationError(f"Coze {action} returned malformed data")
        return data

    async def _chat_poll(self, client: httpx.AsyncClient, message: str) -> Tuple[str, Any]:
        chat = self._read_envelope(
            await client.post("/v3/chat", json=self._chat_payload(message, stream=False)),
            "chat",
        )
        conversation_id, chat_id = chat.get("conversation_id"), chat.get("id")
        if not conversation_id or not chat_id:
            raise GenerationError("Coze chat response is missing its identifiers")
        ids = {"conversation_id": conversation_id, "chat_id": chat_id}
        status = chat.get("status")

        polls = 0
        while status != STATUS_COMPLETED and status not in FAILED_STATUSES and polls < self.max_polls:
            await asyncio.sleep(self.poll_interval)
            chat = self._read_envelope(await client.get("/v3/chat/retrieve", params=ids), "status check")
            status = chat.get("status")
            polls += 1

        if status in FAILED_STATUSES:
            detail = _error_detail(chat)
            logger.error("Coze chat failed", extra={"status": status, "detail": detail})
            raise GenerationError(f"Coze chat {status}: {detail}")
        if status != STATUS_COMPLETED:
            logger.error("Coze chat timed out", extra={"polls": polls, "status": status})
            raise GenerationError(f"Coze chat timeout after {polls} polls")

        messages: List[Any] = self._read_envelope(
            await client.get("/v3/chat/message/list", params=ids),
            "message list",
            expected=list,
        )
        answer = next((m for m in messages if isinstance(m, dict) and _is_answer(m)), None)
        if answer is None:
            raise GenerationError("No assistant response found")
        return _content(answer), messages

    # === Stream mode ===

    @staticmethod
    async def _iter_events(response: httpx.Response) -> AsyncIterator[Tuple[str, str]]:
        """Yield (event, data) pairs from a server-sent-event body"""
        event = ""
        data_lines: List[str] = []
        async for line in response.aiter_lines():
            if not line:
                if event or data_lines:
                    yield event, "\n".join(data_lines)
                event, data_lines = "", []
                continue
            if line.startswith(":"):
                continue
            field, _, value = line.partition(":")
            value = value[1:] if value.startswith(" ") else value
            if field == "event":
                event = value
            elif field == "data":
                data_lines.append(value)
        if event or data_lines:
            yield event, "\n".join(data_lines)

    async def _chat_stream(self, client: httpx.AsyncClient, message: str) -> Tuple[str, Any]:
        completed: Optional[str] = None
        deltas: List[str] = []

        async with client.stream(
            "POST", "/v3/chat", json=self._chat_payload(message, stream=True)
        ) as response:
            response.raise_for_status()
            async for event, data in self._iter_events(response):
                if event == EVENT_DONE:
                    break
                try:
                    payload = json.loads(data) if data else {}
                except json.JSONDecodeError:
                    logger.debug("Skipping non-JSON stream frame", extra={"event": event})
                    continue
                if not isinstance(payload, dict):
                    continue

                if event in (EVENT_CHAT_FAILED, EVENT_ERROR):
                    detail = _error_detail(payload)
                    logger.error("Coze stream reported failure", extra={"event": event, "detail": detail})
                    raise GenerationError(f"Coze chat failed: {detail}")
                if event == EVENT_MESSAGE_DELTA and _is_answer(payload):
                    deltas.append(_content(payload))
                elif event == EVENT_MESSAGE_COMPLETED and _is_answer(payload):
                    completed = _content(payload)

        text = completed if completed is not None else "".join(deltas)
        return text, {"completed": completed is not None, "delta_count": len(deltas)}
