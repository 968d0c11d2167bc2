# config.py
"""Configuration settings for the Forkpoint story direction engine.
Uses Pydantic BaseSettings for automatic environment variable loading.
"""

from __future__ import annotations

from urllib.parse import urlparse

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

logger = structlog.get_logger()

# Endpoints on these hosts are treated as local servers that need no API key.
LOCAL_ENDPOINT_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class ProviderConfig(BaseModel):
    """Immutable connection details for one generative provider."""

    model_config = ConfigDict(frozen=True)

    name: str
    enabled: bool
    endpoint: str
    api_key: str = ""
    model: str


def is_local_endpoint(url: str) -> bool:
    """Return True if ``url`` points at a loopback host."""
    if not url:
        return False
    return (urlparse(url).hostname or "") in LOCAL_ENDPOINT_HOSTS


class ForkpointSettings(BaseSettings):
    """Full configuration for the Forkpoint engine."""

    # Provider A: Gemini generateContent API
    GEMINI_API_KEY: str = ""
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Provider B: any OpenAI-compatible /chat/completions endpoint
    # (OpenAI, Groq, Together, OpenRouter, Ollama...). Full URL expected.
    OPENAI_API_URL: str = ""
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    # Generation parameters
    LLM_TEMPERATURE: float = 0.9
    LLM_MAX_OUTPUT_TOKENS: int = 1024

    # LLM Call Settings
    HTTPX_TIMEOUT: float = 30.0
    HTTPX_CONNECT_TIMEOUT: float = 15.0
    LLM_RETRY_ATTEMPTS: int = 3
    LLM_RATE_LIMIT_DELAY_SECONDS: float = 2.0
    REQUEST_DEADLINE_SECONDS: float | None = None

    # Prompt and result shaping
    MISSING_FIELD_PLACEHOLDER: str = "(not provided)"
    MAX_KEY_ENTITIES: int = 8
    UPLOAD_MAX_CHARS: int = 5000

    # Logging
    LOG_LEVEL_STR: str = Field("INFO", alias="FORKPOINT_LOG_LEVEL")
    LOG_FORMAT: str = (
        "%(asctime)s - %(levelname)s - [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
    )
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    LOG_FILE: str | None = None
    ENABLE_RICH_LOGGING: bool = True

    @model_validator(mode="after")
    def strip_credentials(self) -> ForkpointSettings:
        self.GEMINI_API_KEY = self.GEMINI_API_KEY.strip()
        self.OPENAI_API_KEY = self.OPENAI_API_KEY.strip()
        self.OPENAI_API_URL = self.OPENAI_API_URL.strip()
        return self

    @model_validator(mode="after")
    def warn_keyless_remote_endpoint(self) -> ForkpointSettings:
        if (
            self.OPENAI_API_URL
            and not self.OPENAI_API_KEY
            and not is_local_endpoint(self.OPENAI_API_URL)
        ):
            logger.warning(
                "OPENAI_API_URL is set without OPENAI_API_KEY on a non-local host; "
                "the OpenAI-compatible provider will stay disabled.",
                url=self.OPENAI_API_URL,
            )
        return self

    def gemini_provider(self) -> ProviderConfig:
        return ProviderConfig(
            name="gemini",
            enabled=bool(self.GEMINI_API_KEY),
            endpoint=self.GEMINI_API_BASE.rstrip("/"),
            api_key=self.GEMINI_API_KEY,
            model=self.GEMINI_MODEL,
        )

    def openai_provider(self) -> ProviderConfig:
        has_url = bool(self.OPENAI_API_URL)
        has_key = bool(self.OPENAI_API_KEY)
        return ProviderConfig(
            name="openai",
            enabled=has_url and (has_key or is_local_endpoint(self.OPENAI_API_URL)),
            endpoint=self.OPENAI_API_URL,
            api_key=self.OPENAI_API_KEY,
            model=self.OPENAI_MODEL,
        )

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", populate_by_name=True, extra="ignore"
    )


settings = ForkpointSettings()
