# itinerary_planner/llm.py
import os
import re
import logging
from typing import Optional

import httpx
import openai
from dotenv import load_dotenv
from openai import AsyncOpenAI
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("ITINERARY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

# Load .env file if present
load_dotenv()

DEFAULT_MODEL = os.getenv("ITINERARY_PLANNER_MODEL", "gpt-3.5-turbo")
DEFAULT_TIMEOUT = float(os.getenv("ITINERARY_PLANNER_LLM_TIMEOUT", "60"))

_client: Optional[AsyncOpenAI] = None
_HTTP_429 = re.compile(r"\b429\b")


# ------- Errors -------
class CompletionError(Exception):
    """A completion request failed on the provider side."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class QuotaError(CompletionError):
    pass


class RateLimitError(CompletionError):
    pass


class ProviderError(CompletionError):
    pass


def is_quota_error(exc: BaseException) -> bool:
    """True when ``exc`` signals exhausted quota or rate limiting."""
    if isinstance(exc, (QuotaError, RateLimitError)):
        return True
    if getattr(exc, "status", None) == 429 or getattr(exc, "status_code", None) == 429:
        return True
    message = str(getattr(exc, "message", None) or exc).lower()
    return "quota" in message or "rate limit" in message or _HTTP_429.search(message) is not None


# ------- Request -------
class CompletionRequest(BaseModel):
    system_prompt: Optional[str] = None
    user_prompt: str
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = 1000
    json_mode: bool = False


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is not None:
        return _client
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.warning("OPENAI_API_KEY not set; completion calls will fail over to stored data")
        raise ProviderError("OPENAI_API_KEY environment variable not configured")
    _client = AsyncOpenAI(
        api_key=api_key,
        timeout=httpx.Timeout(DEFAULT_TIMEOUT, connect=10.0),
        max_retries=0,
    )
    return _client


def _translate(exc: openai.OpenAIError) -> CompletionError:
    if isinstance(exc, openai.RateLimitError):
        code = str(getattr(exc, "code", "") or "")
        text = str(exc)
        if "quota" in code or "quota" in text.lower():
            return QuotaError(f"OpenAI API quota exceeded: {text}", status=429)
        return RateLimitError(f"OpenAI API rate limit reached: {text}", status=429)
    if isinstance(exc, openai.APITimeoutError):
        return ProviderError(f"Completion request timed out: {exc}")
    if isinstance(exc, openai.APIStatusError):
        return ProviderError(f"Completion request failed: {exc}", status=exc.status_code)
    return ProviderError(f"Completion request failed: {exc}")


async def complete(request: CompletionRequest, *, model: Optional[str] = None) -> str:
    """Run a single chat completion and return the message text."""
    client = _get_client()
    model = model or DEFAULT_MODEL

    messages = []
    if request.system_prompt:
        messages.append({"role": "system", "content": request.system_prompt})
    messages.append({"role": "user", "content": request.user_prompt})

    kwargs = {}
    if request.json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    logger.debug(
        "Invoking LLM model %s (temperature=%.2f, max_tokens=%d, json=%s)",
        model,
        request.temperature,
        request.max_tokens,
        request.json_mode,
    )
    try:
        resp = await client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            **kwargs,
        )
    except openai.OpenAIError as exc:
        translated = _translate(exc)
        logger.warning("LLM call failed: %s", translated.message)
        raise translated from exc

    raw = resp.choices[0].message.content if resp.choices else None
    if not raw:
        raise ProviderError("Completion returned no content")
    return raw
