"""
Tests for the text generation backends, driven through httpx.MockTransport
"""

import json

import httpx
import pytest

from content_factory.config import CozeMode
from content_factory.core import GenerationError
from content_factory.services.llm import (
    CozeProvider,
    LLMConfig,
    OllamaProvider,
    OpenAIProvider,
    ProviderType,
    clear_provider_cache,
    get_default_provider_type,
    get_llm_provider,
)


# === OpenAI ===

class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_generate_returns_message_content(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "model": "gpt-test",
                "choices": [{"message": {"role": "assistant", "content": '  {"ok": true}  '}}],
                "usage": {"prompt_tokens": 10, "completion_tokens": 5},
            })

        provider = OpenAIProvider(
            api_key="sk-test",
            base_url="https://llm.example/v1",
            model="gpt-test",
            transport=httpx.MockTransport(handler),
        )
        response = await provider.generate("system", "user", LLMConfig(temperature=0.8))

        assert response.text == '{"ok": true}'
        assert response.provider == ProviderType.OPENAI
        assert response.usage.total_tokens == 15
        assert seen["url"] == "https://llm.example/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["temperature"] == 0.8
        assert seen["body"]["response_format"] == {"type": "json_object"}
        assert [m["role"] for m in seen["body"]["messages"]] == ["system", "user"]

    @pytest.mark.asyncio
    async def test_json_mode_off_omits_response_format(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"choices": [{"message": {"content": "# Title"}}]})

        provider = OpenAIProvider(api_key="k", transport=httpx.MockTransport(handler))
        await provider.generate("s", "u", LLMConfig(json_mode=False))
        assert "response_format" not in bodies[0]

    @pytest.mark.asyncio
    async def test_error_status_raises_generation_error(self):
        provider = OpenAIProvider(
            api_key="k",
            transport=httpx.MockTransport(lambda r: httpx.Response(429, json={"error": "slow down"})),
        )
        with pytest.raises(GenerationError):
            await provider.generate("s", "u")

    @pytest.mark.asyncio
    async def test_empty_content_raises_generation_error(self):
        provider = OpenAIProvider(
            api_key="k",
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"choices": []})),
        )
        with pytest.raises(GenerationError):
            await provider.generate("s", "u")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"choices": [None]},
            {"choices": [{"message": None}]},
            {"choices": [{"message": {"content": {"nested": True}}}]},
            {"choices": "not-a-list"},
            [{"choices": []}],
        ],
    )
    async def test_malformed_body_raises_generation_error(self, body):
        provider = OpenAIProvider(
            api_key="k",
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=body)),
        )
        with pytest.raises(GenerationError):
            await provider.generate("s", "u")

    @pytest.mark.asyncio
    async def test_network_error_raises_generation_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = OpenAIProvider(api_key="k", transport=httpx.MockTransport(handler))
        with pytest.raises(GenerationError):
            await provider.generate("s", "u")


# === Ollama ===

class TestOllamaProvider:
    @pytest.mark.asyncio
    async def test_generate(self):
        bodies = []

        def handler(request):
            assert request.url.path == "/api/generate"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"response": '{"a": 1}', "prompt_eval_count": 3, "eval_count": 4})

        provider = OllamaProvider(base_url="http://ollama:11434", model="qwen", transport=httpx.MockTransport(handler))
        response = await provider.generate("sys", "usr", LLMConfig(temperature=0.7))

        assert response.text == '{"a": 1}'
        assert response.usage.total_tokens == 7
        assert bodies[0]["system"] == "sys"
        assert bodies[0]["prompt"] == "usr"
        assert bodies[0]["format"] == "json"
        assert bodies[0]["options"]["temperature"] == 0.7
        assert bodies[0]["stream"] is False

    @pytest.mark.asyncio
    async def test_server_error(self):
        provider = OllamaProvider(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
        with pytest.raises(GenerationError):
            await provider.generate("s", "u")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [["response"], {"response": None}, {"response": 42}])
    async def test_malformed_body_raises_generation_error(self, body):
        provider = OllamaProvider(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=body)))
        with pytest.raises(GenerationError):
            await provider.generate("s", "u")


# === Coze ===

def _envelope(data, code=0, msg="success"):
    return httpx.Response(200, json={"code": code, "msg": msg, "data": data})


def _coze(handler, **kwargs):
    kwargs.setdefault("mode", CozeMode.POLL)
    return CozeProvider(
        api_key="pat",
        bot_id="bot-1",
        base_url="https://coze.example",
        poll_interval=0,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestCozePollMode:
    @pytest.mark.asyncio
    async def test_polls_until_completed_then_reads_answer(self):
        statuses = iter(["in_progress", "in_progress", "completed"])
        calls = []

        def handler(request):
            calls.append(request.url.path)
            if request.url.path == "/v3/chat":
                body = json.loads(request.content)
                assert body["bot_id"] == "bot-1"
                assert body["stream"] is False
                assert body["additional_messages"][0]["content"] == "system\n\nuser"
                return _envelope({"id": "chat-1", "conversation_id": "conv-1", "status": "created"})
            if request.url.path == "/v3/chat/retrieve":
                assert request.url.params["chat_id"] == "chat-1"
                return _envelope({"id": "chat-1", "conversation_id": "conv-1", "status": next(statuses)})
            if request.url.path == "/v3/chat/message/list":
                return _envelope([
                    {"role": "assistant", "type": "verbose", "content": "thinking"},
                    {"role": "assistant", "type": "answer", "content": '{"topics": []}'},
                ])
            return httpx.Response(404)

        response = await _coze(handler).generate("system", "user")

        assert response.text == '{"topics": []}'
        assert response.provider == ProviderType.COZE
        assert calls.count("/v3/chat/retrieve") == 3

    @pytest.mark.asyncio
    async def test_never_terminal_times_out_after_bounded_polls(self):
        polls = []

        def handler(request):
            if request.url.path == "/v3/chat":
                return _envelope({"id": "c", "conversation_id": "v", "status": "created"})
            polls.append(request.url.path)
            return _envelope({"id": "c", "conversation_id": "v", "status": "in_progress"})

        with pytest.raises(GenerationError, match="timeout"):
            await _coze(handler, max_polls=5).generate("s", "u")
        assert polls == ["/v3/chat/retrieve"] * 5

    @pytest.mark.asyncio
    async def test_failed_status(self):
        def handler(request):
            if request.url.path == "/v3/chat":
                return _envelope({"id": "c", "conversation_id": "v", "status": "in_progress"})
            return _envelope({"id": "c", "conversation_id": "v", "status": "failed", "last_error": {"code": 1, "msg": "boom"}})

        with pytest.raises(GenerationError, match="boom"):
            await _coze(handler).generate("s", "u")

    @pytest.mark.asyncio
    async def test_non_zero_code_on_submit(self):
        with pytest.raises(GenerationError, match="bad token"):
            await _coze(lambda r: _envelope(None, code=4100, msg="bad token")).generate("s", "u")

    @pytest.mark.asyncio
    async def test_no_answer_message(self):
        def handler(request):
            if request.url.path == "/v3/chat":
                return _envelope({"id": "c", "conversation_id": "v", "status": "completed"})
            return _envelope([{"role": "user", "type": "question", "content": "hi"}])

        with pytest.raises(GenerationError, match="No assistant response"):
            await _coze(handler).generate("s", "u")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "chat",
        [
            {"status": "created"},
            {"id": "c", "status": "created"},
            ["c", "v"],
        ],
    )
    async def test_malformed_chat_envelope(self, chat):
        with pytest.raises(GenerationError):
            await _coze(lambda r: _envelope(chat)).generate("s", "u")

    @pytest.mark.asyncio
    async def test_body_that_is_not_an_object(self):
        with pytest.raises(GenerationError, match="malformed"):
            await _coze(lambda r: httpx.Response(200, json=[1, 2])).generate("s", "u")

    @pytest.mark.asyncio
    async def test_malformed_message_list(self):
        def handler(request):
            if request.url.path == "/v3/chat":
                return _envelope({"id": "c", "conversation_id": "v", "status": "completed"})
            return _envelope({"messages": "not-a-list"})

        with pytest.raises(GenerationError):
            await _coze(handler).generate("s", "u")

    @pytest.mark.asyncio
    async def test_failure_with_non_object_last_error(self):
        def handler(request):
            return _envelope({"id": "c", "conversation_id": "v", "status": "failed", "last_error": "oops"})

        with pytest.raises(GenerationError, match="no detail"):
            await _coze(handler).generate("s", "u")


def _sse(*frames):
    body = ""
    for event, data in frames:
        payload = data if isinstance(data, str) else json.dumps(data)
        body += f"event:{event}\ndata:{payload}\n\n"
    return httpx.Response(200, content=body.encode("utf-8"), headers={"Content-Type": "text/event-stream"})


class TestCozeStreamMode:
    @pytest.mark.asyncio
    async def test_keeps_last_completed_answer(self):
        answer = {"role": "assistant", "type": "answer"}

        def handler(request):
            assert json.loads(request.content)["stream"] is True
            return _sse(
                ("conversation.chat.created", {"id": "c"}),
                ("conversation.message.delta", {**answer, "content": '{"a"'}),
                ("conversation.message.delta", {**answer, "content": ": 1}"}),
                ("conversation.message.completed", {**answer, "content": '{"a": 1}'}),
                ("conversation.message.completed", {"role": "assistant", "type": "follow_up", "content": "More?"}),
                ("conversation.chat.completed", {"id": "c"}),
                ("done", '"[DONE]"'),
            )

        response = await _coze(handler, mode=CozeMode.STREAM).generate("s", "u")
        assert response.text == '{"a": 1}'

    @pytest.mark.asyncio
    async def test_falls_back_to_concatenated_deltas(self):
        answer = {"role": "assistant", "type": "answer"}

        def handler(request):
            return _sse(
                ("conversation.message.delta", {**answer, "content": "Hello "}),
                ("conversation.message.delta", {**answer, "content": "world"}),
                ("done", '"[DONE]"'),
            )

        response = await _coze(handler, mode=CozeMode.STREAM).generate("s", "u")
        assert response.text == "Hello world"

    @pytest.mark.asyncio
    async def test_failed_event(self):
        def handler(request):
            return _sse(("conversation.chat.failed", {"last_error": {"code": 5, "msg": "quota"}}))

        with pytest.raises(GenerationError, match="quota"):
            await _coze(handler, mode=CozeMode.STREAM).generate("s", "u")

    @pytest.mark.asyncio
    async def test_empty_stream(self):
        with pytest.raises(GenerationError):
            await _coze(lambda r: _sse(("done", '"[DONE]"')), mode=CozeMode.STREAM).generate("s", "u")


# === Factory ===

class TestFactory:
    @pytest.fixture(autouse=True)
    def _fresh_cache(self):
        clear_provider_cache()
        yield
        clear_provider_cache()

    def test_defaults_to_ollama(self):
        assert get_default_provider_type() == ProviderType.OLLAMA

    def test_openai_key_selects_openai(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk")
        assert get_default_provider_type() == ProviderType.OPENAI

    def test_coze_credentials_select_coze(self, monkeypatch):
        monkeypatch.setenv("COZE_API_KEY", "pat")
        monkeypatch.setenv("COZE_BOT_ID", "bot")
        assert get_default_provider_type() == ProviderType.COZE

    def test_explicit_provider_wins(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk")
        monkeypatch.setenv("LLM_PROVIDER", "ollama")
        assert get_default_provider_type() == ProviderType.OLLAMA

    def test_unconfigured_openai_raises(self):
        with pytest.raises(ValueError):
            get_llm_provider(ProviderType.OPENAI)

    def test_provider_is_cached(self):
        first = get_llm_provider(ProviderType.OLLAMA)
        assert get_llm_provider(ProviderType.OLLAMA) is first
        assert get_llm_provider(ProviderType.OLLAMA, use_cache=False) is not first
