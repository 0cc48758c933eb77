"""HTTP implementation of InsightGeneratorClient (OpenRouter-compatible)."""

import asyncio
from typing import Dict, List

import httpx
import structlog

from src.core.config import settings
from src.core.metrics import (
    record_provider_failure,
    record_provider_success,
    track_provider_latency,
)
from src.domain.exceptions import InsightGenerationException
from src.domain.interfaces import InsightGeneratorClient

logger = structlog.get_logger(__name__)

PROVIDER = "llm"


class HttpInsightGeneratorClient(InsightGeneratorClient):
    """
    Thin chat-completions client.

    Retries timeouts and 5xx responses with exponential backoff; 4xx
    responses fail immediately.
    """

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        max_retries: int = 2,
    ):
        self._api_url = api_url or settings.llm_api_url
        self._api_key = api_key if api_key is not None else settings.llm_api_key
        self._model = model or settings.llm_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature
        self._timeout = timeout or settings.llm_timeout
        self._max_retries = max_retries

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        if not self._api_key:
            raise InsightGenerationException("LLM API key is not configured")

        payload = {
            "model": self._model,
            "messages": messages,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": settings.app_name,
        }

        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_provider_latency(PROVIDER):
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.post(self._api_url, json=payload, headers=headers)

                if response.status_code >= 500:
                    record_provider_failure(PROVIDER, "error")
                    last_exception = InsightGenerationException(
                        message=f"LLM API error ({response.status_code}): {response.text}",
                        status_code=response.status_code,
                    )
                    logger.warning(
                        "llm_api_error",
                        status_code=response.status_code,
                        attempt=attempt + 1,
                    )
                elif response.status_code >= 400:
                    record_provider_failure(PROVIDER, "rejected")
                    raise InsightGenerationException(
                        message=f"LLM API error ({response.status_code}): {response.text}",
                        status_code=response.status_code,
                    )
                else:
                    record_provider_success(PROVIDER)
                    return self._extract_content(response.json())

            except httpx.TimeoutException:
                record_provider_failure(PROVIDER, "timeout")
                last_exception = InsightGenerationException("LLM request timed out")
                logger.warning(
                    "llm_api_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except InsightGenerationException:
                raise
            except Exception as e:
                record_provider_failure(PROVIDER, "error")
                last_exception = InsightGenerationException(f"Unexpected error: {str(e)}")
                logger.error("llm_api_unexpected_error", attempt=attempt + 1, error=str(e))

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or InsightGenerationException("Failed to generate insight")

    @staticmethod
    def _extract_content(data: dict) -> str:
        choices = data.get("choices") or []
        if not choices:
            raise InsightGenerationException("No response from LLM provider")

        content = (choices[0].get("message") or {}).get("content")
        if not content:
            raise InsightGenerationException("Empty response from LLM provider")

        return content
