# core/llm_interface.py
"""
Handles all direct interactions with the generative providers used for
story analysis. Each adapter builds its provider-specific request envelope,
retries on rate limiting, and extracts the raw text from the response.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Copyright 2025 Dennis Lewis
"""

# Standard library imports
import asyncio
from abc import ABC, abstractmethod

# Type hints
from typing import Any

# Third-party imports
import httpx
import structlog

# Local imports
from config import ForkpointSettings, ProviderConfig
from core.exceptions import (
    FatalProviderError,
    ProviderUnavailableError,
    TransientProviderError,
)
from core.retry import RetryPolicy, SleepFunc, linear_backoff, retry_async
from models import AnalysisRequest, ExpansionRequest
from prompt_renderer import render_prompt, sanitize_prompt_field

logger = structlog.get_logger(__name__)

RATE_LIMIT_STATUS = 429


def _snippet(text: str, limit: int = 300) -> str:
    return text[:limit] if text else ""


class ProviderAdapter(ABC):
    """Base class for one generative backend.

    Subclasses supply the request envelope and the response text path; the
    base class owns availability, prompt rendering, retries and error
    containment. Public coroutines return ``None`` instead of raising.
    """

    # Provider B leaves out prompt sections whose input was not provided.
    omit_missing_sections: bool = False
    detailed_expand_guidance: bool = True

    def __init__(
        self,
        config: ProviderConfig,
        settings: ForkpointSettings,
        client: httpx.AsyncClient | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        self.config = config
        self.settings = settings
        # A client passed in by the caller stays open; the caller closes it.
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(
                settings.HTTPX_TIMEOUT, connect=settings.HTTPX_CONNECT_TIMEOUT
            )
        )
        self._sleep = sleep or asyncio.sleep
        self.retry_policy = RetryPolicy(
            max_attempts=settings.LLM_RETRY_ATTEMPTS,
            backoff=linear_backoff(settings.LLM_RATE_LIMIT_DELAY_SECONDS),
            retry_on=(TransientProviderError,),
        )
        self.request_count = 0

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def is_available(self) -> bool:
        return self.config.enabled

    async def aclose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def generate_analysis(self, request: AnalysisRequest) -> str | None:
        """Ask the provider for a JSON story analysis. Returns raw text."""
        placeholder = self.settings.MISSING_FIELD_PLACEHOLDER
        prompt = render_prompt(
            "analysis.j2",
            {
                "full_context": sanitize_prompt_field(request.full_context, placeholder),
                "short_memory": sanitize_prompt_field(request.short_memory, placeholder),
                "last_paragraph": sanitize_prompt_field(
                    request.last_paragraph, placeholder
                ),
                "placeholder": placeholder,
                "omit_missing_sections": self.omit_missing_sections,
                "max_entities": self.settings.MAX_KEY_ENTITIES,
            },
        )
        return await self.complete(prompt)

    async def expand_path(self, request: ExpansionRequest) -> str | None:
        """Ask the provider for a 3-4 sentence preview of a chosen path."""
        placeholder = self.settings.MISSING_FIELD_PLACEHOLDER
        prompt = render_prompt(
            "expand_path.j2",
            {
                "story_context": sanitize_prompt_field(request.story_context, placeholder),
                "path_name": sanitize_prompt_field(request.path_name, placeholder),
                "path_description": sanitize_prompt_field(
                    request.path_description, placeholder
                ),
                "detailed_guidance": self.detailed_expand_guidance,
            },
        )
        return await self.complete(prompt)

    async def complete(self, prompt: str) -> str | None:
        """Send ``prompt`` with retries and return the response text or None."""
        try:
            response = await retry_async(
                lambda: self._send(prompt),
                self.retry_policy,
                sleep=self._sleep,
                description=f"[{self.name}] request",
            )
        except ProviderUnavailableError:
            logger.debug(f"[{self.name}] Not configured; skipping call.")
            return None
        except TransientProviderError:
            logger.error(
                f"[{self.name}] Rate limited on all {self.retry_policy.max_attempts} attempts."
            )
            return None
        except FatalProviderError as exc:
            logger.error(
                f"[{self.name}] Error {exc.status_code}: {exc}",
            )
            return None
        except httpx.HTTPError as exc:
            logger.error(f"[{self.name}] FAILED: {type(exc).__name__} - {exc}")
            return None

        text = self._extract_text_safely(response)
        if text is not None:
            logger.info(
                f"[{self.name}] Success. Response: {_snippet(text, 150)}..."
            )
        return text

    async def _send(self, prompt: str) -> httpx.Response:
        if not self.is_available:
            raise ProviderUnavailableError(
                f"{self.name} provider is not configured", self.name
            )
        self.request_count += 1
        logger.debug(
            f"[{self.name}] Calling model '{self.config.model}' "
            f"(request #{self.request_count})."
        )
        response = await self._client.post(**self.build_request(prompt))
        logger.debug(f"[{self.name}] Status: {response.status_code}")
        if response.status_code == RATE_LIMIT_STATUS:
            raise TransientProviderError(
                f"{self.name} rate limited the request", self.name
            )
        if not response.is_success:
            raise FatalProviderError(
                _snippet(response.text), self.name, response.status_code
            )
        return response

    def _extract_text_safely(self, response: httpx.Response) -> str | None:
        try:
            data = response.json()
            self._log_usage(data)
            return self.extract_text(data)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            logger.warning(
                f"[{self.name}] Parse error: {exc}. Body: {_snippet(response.text, 200)}"
            )
            return None

    def _log_usage(self, data: Any) -> None:
        usage = self.usage_from(data)
        if usage:
            logger.debug(f"[{self.name}] ('{self.config.model}') Usage: {usage}")

    @abstractmethod
    def build_request(self, prompt: str) -> dict[str, Any]:
        """Return keyword arguments for ``httpx.AsyncClient.post``."""

    @abstractmethod
    def extract_text(self, data: Any) -> str | None:
        """Return the primary candidate's text, or None if there is none."""

    def usage_from(self, data: Any) -> dict[str, Any] | None:
        return None


class GeminiProvider(ProviderAdapter):
    """Provider A: Google Gemini ``generateContent`` endpoint."""

    def build_request(self, prompt: str) -> dict[str, Any]:
        return {
            "url": f"{self.config.endpoint}/models/{self.config.model}:generateContent",
            "params": {"key": self.config.api_key},
            "headers": {"Content-Type": "application/json"},
            "json": {
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": self.settings.LLM_TEMPERATURE,
                    "maxOutputTokens": self.settings.LLM_MAX_OUTPUT_TOKENS,
                },
            },
        }

    def extract_text(self, data: Any) -> str | None:
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            logger.warning(f"[{self.name}] Response contained no candidates.")
            return None
        parts = candidates[0].get("content", {}).get("parts")
        if not isinstance(parts, list) or not parts:
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) else None

    def usage_from(self, data: Any) -> dict[str, Any] | None:
        usage = data.get("usageMetadata") if isinstance(data, dict) else None
        return usage if isinstance(usage, dict) else None


class OpenAICompatibleProvider(ProviderAdapter):
    """Provider B: any OpenAI-compatible ``/chat/completions`` endpoint.

    Works with OpenAI, Groq, Together AI, OpenRouter, Ollama and similar
    servers. Local endpoints are used without an Authorization header.
    """

    omit_missing_sections = True
    detailed_expand_guidance = False

    def build_request(self, prompt: str) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return {
            "url": self.config.endpoint,
            "headers": headers,
            "json": {
                "model": self.config.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": self.settings.LLM_TEMPERATURE,
                "max_tokens": self.settings.LLM_MAX_OUTPUT_TOKENS,
            },
        }

    def extract_text(self, data: Any) -> str | None:
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            logger.warning(f"[{self.name}] Response contained no choices.")
            return None
        content = choices[0].get("message", {}).get("content")
        return content if isinstance(content, str) else None

    def usage_from(self, data: Any) -> dict[str, Any] | None:
        usage = data.get("usage") if isinstance(data, dict) else None
        return usage if isinstance(usage, dict) else None


def build_providers(
    settings: ForkpointSettings, client: httpx.AsyncClient | None = None
) -> list[ProviderAdapter]:
    """Create the providers in fallback order: Gemini, then OpenAI-compatible."""
    return [
        GeminiProvider(settings.gemini_provider(), settings, client=client),
        OpenAICompatibleProvider(settings.openai_provider(), settings, client=client),
    ]
