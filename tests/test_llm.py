import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from itinerary_planner import llm
from itinerary_planner.llm import CompletionRequest, ProviderError, QuotaError, RateLimitError


def _fake_client(create: AsyncMock) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def _reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(cls, status, message, code=None):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return cls(message, response=response, body={"message": message, "code": code})


def test_complete_sends_prompts_and_json_mode(monkeypatch):
    create = AsyncMock(return_value=_reply('{"days": []}'))
    monkeypatch.setattr(llm, "_client", _fake_client(create))

    text = asyncio.run(
        llm.complete(
            CompletionRequest(system_prompt="sys", user_prompt="hi", temperature=0.2, max_tokens=50, json_mode=True),
            model="gpt-test",
        )
    )

    assert text == '{"days": []}'
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["messages"] == [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["max_tokens"] == 50


def test_complete_without_system_prompt_or_json(monkeypatch):
    create = AsyncMock(return_value=_reply("Day 1: ..."))
    monkeypatch.setattr(llm, "_client", _fake_client(create))

    asyncio.run(llm.complete(CompletionRequest(user_prompt="plan")))

    kwargs = create.await_args.kwargs
    assert [m["role"] for m in kwargs["messages"]] == ["user"]
    assert "response_format" not in kwargs


def test_empty_completion_is_provider_error(monkeypatch):
    monkeypatch.setattr(llm, "_client", _fake_client(AsyncMock(return_value=_reply(None))))

    with pytest.raises(ProviderError):
        asyncio.run(llm.complete(CompletionRequest(user_prompt="plan")))


@pytest.mark.parametrize(
    "error, expected",
    [
        (_status_error(openai.RateLimitError, 429, "You exceeded your current quota", "insufficient_quota"), QuotaError),
        (_status_error(openai.RateLimitError, 429, "Too many requests"), RateLimitError),
        (_status_error(openai.InternalServerError, 500, "server exploded"), ProviderError),
    ],
)
def test_provider_errors_are_translated(monkeypatch, error, expected):
    monkeypatch.setattr(llm, "_client", _fake_client(AsyncMock(side_effect=error)))

    with pytest.raises(expected) as excinfo:
        asyncio.run(llm.complete(CompletionRequest(user_prompt="plan")))
    assert excinfo.value.status == error.status_code


def test_timeout_is_provider_error(monkeypatch):
    error = openai.APITimeoutError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    monkeypatch.setattr(llm, "_client", _fake_client(AsyncMock(side_effect=error)))

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(llm.complete(CompletionRequest(user_prompt="plan")))
    assert "timed out" in excinfo.value.message
    assert not llm.is_quota_error(excinfo.value)


def test_missing_api_key_is_provider_error(monkeypatch):
    monkeypatch.setattr(llm, "_client", None)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ProviderError):
        asyncio.run(llm.complete(CompletionRequest(user_prompt="plan")))


@pytest.mark.parametrize(
    "exc, expected",
    [
        (QuotaError("x"), True),
        (RateLimitError("x"), True),
        (ProviderError("x", status=429), True),
        (RuntimeError("Error code: 429"), True),
        (RuntimeError("insufficient QUOTA"), True),
        (RuntimeError("rate limit reached"), True),
        (ProviderError("bad gateway", status=502), False),
        (ValueError("Expecting value"), False),
        (ProviderError("Completion request timed out after 14290 ms"), False),
    ],
)
def test_is_quota_error(exc, expected):
    assert llm.is_quota_error(exc) is expected
