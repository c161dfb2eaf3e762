import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

import httpx

from ..config import Settings, settings as default_settings
from ..errors import (
    AccessDeniedError,
    AutoWriterError,
    ContentBlockedError,
    CredentialError,
    EmptyCompletionError,
    QuotaExceededError,
    UpstreamAPIError,
    UpstreamContentError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from ..models.gemini import GeminiResponse
from .prompt_service import KEY_TEST_PROMPT

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
AuthStrategy = Callable[[str], tuple[dict[str, str], dict[str, str]]]


class ModelTier(str, Enum):
    FAST = "fast"
    HIGH_QUALITY = "high-quality"


@dataclass(frozen=True)
class TierConfig:
    model: str
    timeout: float
    max_output_tokens: int
    max_retries: int


_SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


# ---------------------------------------------------------------------------
# Authentication strategies, tried in order on transport failure
# ---------------------------------------------------------------------------

def _header_auth(api_key: str) -> tuple[dict[str, str], dict[str, str]]:
    return {"x-goog-api-key": api_key}, {}


def _query_auth(api_key: str) -> tuple[dict[str, str], dict[str, str]]:
    return {}, {"key": api_key}


AUTH_STRATEGIES: tuple[tuple[str, AuthStrategy], ...] = (
    ("header", _header_auth),
    ("query", _query_auth),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _request_body(prompt: str, max_output_tokens: Optional[int] = None) -> dict:
    body: dict = {"contents": [{"parts": [{"text": prompt}]}]}
    if max_output_tokens is not None:
        body["generationConfig"] = {
            "temperature": 0.7,
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": max_output_tokens,
        }
        body["safetySettings"] = [
            {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
            for category in _SAFETY_CATEGORIES
        ]
    return body


def _raise_for_status(status: int, body: str) -> None:
    if status == 429:
        raise QuotaExceededError(details={"status": status})
    if status == 403:
        raise AccessDeniedError(details={"status": status})
    if status == 503:
        raise UpstreamAPIError(status, body, message="The model is overloaded. Please try again later.")
    raise UpstreamAPIError(status, body)


def _extract_text(response: httpx.Response) -> str:
    if response.is_error:
        _raise_for_status(response.status_code, response.text)

    try:
        payload = GeminiResponse.model_validate(response.json())
    except ValueError as exc:
        raise UpstreamAPIError(
            response.status_code,
            response.text,
            message="Invalid response structure from Gemini API",
        ) from exc

    if payload.error is not None:
        _raise_for_status(payload.error.code or 500, payload.error.message or "Unknown API error")

    if payload.prompt_feedback and payload.prompt_feedback.block_reason:
        raise ContentBlockedError(payload.prompt_feedback.block_reason)

    if not payload.candidates:
        raise EmptyCompletionError("Invalid response structure from Gemini API: no candidates")

    candidate = payload.candidates[0]
    if candidate.is_blocked:
        raise ContentBlockedError(candidate.finish_reason or "")

    text = candidate.text
    if not text.strip():
        raise EmptyCompletionError()
    return text


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GeminiClient:
    """
    Calls the Gemini ``generateContent`` endpoint with layered reliability:

    - each attempt tries the auth strategies in order, moving on only after a
      transport failure, all under the tier's deadline;
    - the fast tier retries retryable failures with linear backoff;
    - a failed high-quality call is re-run on the fast tier, and if that fails
      too the high-quality error is the one raised.

    Holds configuration only; every attempt opens its own HTTP connection.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
        auth_strategies: tuple[tuple[str, AuthStrategy], ...] = AUTH_STRATEGIES,
    ):
        cfg = config or default_settings
        self.base_url = cfg.gemini_base_url.rstrip("/")
        self.retry_base_delay = cfg.retry_base_delay_seconds
        self.tiers = {
            ModelTier.FAST: TierConfig(
                model=cfg.gemini_fast_model,
                timeout=cfg.fast_timeout_seconds,
                max_output_tokens=cfg.fast_max_output_tokens,
                max_retries=cfg.max_retries,
            ),
            ModelTier.HIGH_QUALITY: TierConfig(
                model=cfg.gemini_pro_model,
                timeout=cfg.pro_timeout_seconds,
                max_output_tokens=cfg.pro_max_output_tokens,
                max_retries=0,
            ),
        }
        self._transport = transport
        self._sleep = sleep
        self._auth_strategies = auth_strategies

    def endpoint(self, tier: ModelTier) -> str:
        return f"{self.base_url}/models/{self.tiers[tier].model}:generateContent"

    async def generate(self, prompt: str, api_key: str, tier: ModelTier = ModelTier.FAST) -> str:
        """Return the first candidate's text for ``prompt``."""
        if tier is ModelTier.FAST:
            return await self._generate_with_retry(prompt, api_key, ModelTier.FAST)

        try:
            return await self._generate_with_retry(prompt, api_key, ModelTier.HIGH_QUALITY)
        except Exception as exc:
            logger.warning("High-quality tier failed (%s); falling back to fast tier.", exc)
            try:
                return await self._generate_with_retry(prompt, api_key, ModelTier.FAST)
            except Exception as fallback_exc:
                logger.error("Fast-tier fallback failed as well: %s", fallback_exc)
                raise exc

    async def test_api_key(self, api_key: str) -> bool:
        """
        Ask for a one-word completion using header auth, without retries.

        Raises QuotaExceededError / AccessDeniedError / CredentialError for 429 / 403 /
        other error statuses. Returns False when the call fails in transit or the
        answer carries no usable text.
        """
        config = self.tiers[ModelTier.FAST]
        headers, params = _header_auth(api_key)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=config.timeout) as client:
                response = await client.post(
                    self.endpoint(ModelTier.FAST),
                    json=_request_body(KEY_TEST_PROMPT),
                    headers=headers,
                    params=params,
                )
        except httpx.HTTPError as exc:
            logger.warning("API key test request failed: %s", exc)
            return False

        if response.status_code == 429:
            raise QuotaExceededError()
        if response.status_code == 403:
            raise AccessDeniedError()
        if response.is_error:
            logger.warning("API key test failed: %s %s", response.status_code, response.reason_phrase)
            raise CredentialError(
                f"API test failed: {response.status_code} {response.reason_phrase}",
                {"status": response.status_code},
            )

        try:
            payload = GeminiResponse.model_validate(response.json())
        except ValueError:
            logger.warning("API key test returned an unreadable body.")
            return False

        if payload.error is not None:
            logger.warning("API key test returned an error body: %s", payload.error.message)
            return False
        return bool(payload.candidates and payload.candidates[0].text)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _generate_with_retry(self, prompt: str, api_key: str, tier: ModelTier) -> str:
        config = self.tiers[tier]
        total = config.max_retries + 1
        attempt = 1
        while True:
            try:
                text = await self._attempt(prompt, api_key, tier)
                logger.debug("Gemini %s answered on attempt %d (first 500 chars): %s", config.model, attempt, text[:500])
                return text
            except (AccessDeniedError, UpstreamContentError) as exc:
                logger.warning("Gemini %s attempt %d failed, not retryable: %s", config.model, attempt, exc)
                raise
            except AutoWriterError as exc:
                if attempt >= total:
                    logger.warning("Gemini %s attempt %d/%d failed, giving up: %s", config.model, attempt, total, exc)
                    raise
                delay = attempt * self.retry_base_delay
                logger.warning(
                    "Gemini %s attempt %d/%d failed: %s; retrying in %.1fs",
                    config.model, attempt, total, exc, delay,
                )
                await self._sleep(delay)
                attempt += 1

    async def _attempt(self, prompt: str, api_key: str, tier: ModelTier) -> str:
        config = self.tiers[tier]
        body = _request_body(prompt, config.max_output_tokens)
        try:
            response = await asyncio.wait_for(
                self._post(self.endpoint(tier), body, api_key),
                timeout=config.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise UpstreamTimeoutError(config.timeout) from exc
        return _extract_text(response)

    async def _post(self, url: str, body: dict, api_key: str) -> httpx.Response:
        last_error: Optional[httpx.TransportError] = None
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            for name, strategy in self._auth_strategies:
                headers, params = strategy(api_key)
                try:
                    return await client.post(url, json=body, headers=headers, params=params)
                except httpx.TransportError as exc:
                    logger.warning("Gemini request with %s auth failed in transit: %s", name, exc)
                    last_error = exc
                except httpx.HTTPError as exc:
                    raise UpstreamTransportError(
                        f"Gemini request failed: {exc}",
                        {"error_type": type(exc).__name__},
                    ) from exc
        raise UpstreamTransportError(
            f"Network error reaching Gemini API: {last_error}",
            {"error_type": type(last_error).__name__},
        ) from last_error
