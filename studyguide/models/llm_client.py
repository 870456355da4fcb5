from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol
import logging
import os
import time

from openai import AsyncOpenAI
from dotenv import load_dotenv

from studyguide.errors import InvocationFailure

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
ENV_PATH = os.path.join(ROOT_DIR, ".env")

load_dotenv(ENV_PATH)

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_PRIMARY_MODEL = "meta-llama/llama-3.3-70b-instruct"
DEFAULT_FALLBACK_MODEL = "openai/gpt-4o-mini"


@dataclass
class LLMConfig:
    model: str = field(default_factory=lambda: os.getenv("STUDYGUIDE_PRIMARY_MODEL", DEFAULT_PRIMARY_MODEL))
    fallback_model: str = field(default_factory=lambda: os.getenv("STUDYGUIDE_FALLBACK_MODEL", DEFAULT_FALLBACK_MODEL))
    max_completion_tokens: int = 16000
    temperature: float = 0.1
    json_mode: bool = True
    request_timeout_s: float = 120.0  # per call, well under the pipeline budget


# One call to the inference service, kept only for logging
@dataclass
class InvocationAttempt:
    model: str
    system_prompt: str
    user_prompt: str
    raw_response: Optional[str] = None
    error: Optional[BaseException] = None
    elapsed_s: float = 0.0


class InferenceService(Protocol):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str,
        temperature: float,
        max_tokens: int,
        json_mode: bool,
        timeout: Optional[float] = None,
    ) -> str:
        ...


class OpenRouterService:
    """Chat-completions service behind OpenRouter's OpenAI-compatible API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        referer: Optional[str] = None,
        app_title: Optional[str] = None,
    ):
        self._api_key = api_key or os.getenv("OPENROUTER_API_KEY")
        self._base_url = base_url or os.getenv("OPENROUTER_BASE_URL", OPENROUTER_BASE_URL)
        self._headers = {
            "HTTP-Referer": referer or os.getenv("STUDYGUIDE_BASE_URL", ""),
            "X-Title": app_title or os.getenv("STUDYGUIDE_APP_TITLE", "Study Guide Generator"),
        }
        self._client: Any = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            # Fallback model is the only retry, so the SDK must not retry on its own
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                default_headers=self._headers,
                max_retries=0,
            )
        return self._client

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str,
        temperature: float,
        max_tokens: int,
        json_mode: bool,
        timeout: Optional[float] = None,
    ) -> str:

        client = self._get_client()

        # Build request payload
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        request: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        if json_mode:
            request["response_format"] = {"type": "json_object"}

        if timeout is not None:
            request["timeout"] = timeout

        response = await client.chat.completions.create(**request)

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


_default_service: Optional[OpenRouterService] = None


def get_default_service() -> OpenRouterService:
    global _default_service
    if _default_service is None:
        _default_service = OpenRouterService()
    return _default_service


async def _attempt(
    service: InferenceService,
    model: str,
    system_prompt: str,
    user_prompt: str,
    cfg: LLMConfig,
) -> InvocationAttempt:

    attempt = InvocationAttempt(model=model, system_prompt=system_prompt, user_prompt=user_prompt)
    start = time.perf_counter()

    try:
        text = await service.complete(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=model,
            temperature=cfg.temperature,
            max_tokens=cfg.max_completion_tokens,
            json_mode=cfg.json_mode,
            timeout=cfg.request_timeout_s,
        )
        if not text or not text.strip():
            raise ValueError("empty completion")
        attempt.raw_response = text
    except Exception as e:
        attempt.error = e

    attempt.elapsed_s = time.perf_counter() - start
    return attempt


def _describe(error: Optional[BaseException]) -> str:
    # Type name only; provider messages can carry auth or account details
    return type(error).__name__ if error is not None else "unknown error"


async def call_llm(
    system_prompt: str,
    user_prompt: str,
    cfg: Optional[LLMConfig] = None,
    service: Optional[InferenceService] = None,
) -> str:
    """
    Ask the primary model, then the fallback model once if that fails.

    Any exception or an empty completion counts as a failure. The raw text
    of the first usable completion is returned without looking at it.
    Raises InvocationFailure when both models fail.
    """
    cfg = cfg or LLMConfig()
    service = service or get_default_service()

    primary = await _attempt(service, cfg.model, system_prompt, user_prompt, cfg)
    if primary.error is None:
        return primary.raw_response

    logger.warning(
        "LLM call to %s failed (%s) after %.1fs, trying fallback model %s",
        primary.model, _describe(primary.error), primary.elapsed_s, cfg.fallback_model,
    )

    fallback = await _attempt(service, cfg.fallback_model, system_prompt, user_prompt, cfg)
    if fallback.error is None:
        return fallback.raw_response

    logger.error(
        "Fallback model %s failed (%s) after %.1fs",
        fallback.model, _describe(fallback.error), fallback.elapsed_s,
    )
    raise InvocationFailure(
        f"Both {primary.model} and {fallback.model} failed", model=fallback.model
    ) from fallback.error
