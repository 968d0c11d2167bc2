# core/exceptions.py
"""Exceptions raised while talking to generative providers."""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for provider-related errors."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderUnavailableError(ProviderError):
    """Raised when a provider is called without the configuration it needs."""


class TransientProviderError(ProviderError):
    """Raised when the provider rate-limits the request (HTTP 429)."""

    def __init__(
        self, message: str, provider: str | None = None, status_code: int = 429
    ) -> None:
        super().__init__(message, provider)
        self.status_code = status_code


class FatalProviderError(ProviderError):
    """Raised for any non-success status that must not be retried."""

    def __init__(
        self, message: str, provider: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message, provider)
        self.status_code = status_code


class ResponseValidationError(ProviderError):
    """Raised when a provider payload does not satisfy the result contract."""
