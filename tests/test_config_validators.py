# tests/test_config_validators.py

import config
import pytest
from config import ForkpointSettings, is_local_endpoint
from pydantic import ValidationError


def test_gemini_enabled_only_with_key():
    assert ForkpointSettings(GEMINI_API_KEY="k").gemini_provider().enabled
    assert not ForkpointSettings(GEMINI_API_KEY="").gemini_provider().enabled
    assert not ForkpointSettings(GEMINI_API_KEY="   ").gemini_provider().enabled


def test_openai_requires_url_and_key_for_remote_hosts():
    remote = "https://api.example.com/v1/chat/completions"
    assert ForkpointSettings(
        OPENAI_API_URL=remote, OPENAI_API_KEY="sk"
    ).openai_provider().enabled
    assert not ForkpointSettings(OPENAI_API_URL=remote).openai_provider().enabled
    assert not ForkpointSettings(OPENAI_API_KEY="sk").openai_provider().enabled


def test_openai_local_endpoint_enabled_without_key():
    provider = ForkpointSettings(
        OPENAI_API_URL="http://localhost:11434/v1/chat/completions"
    ).openai_provider()
    assert provider.enabled
    assert provider.api_key == ""


def test_keyless_remote_endpoint_warns(monkeypatch):
    warnings: list[str] = []

    def fake_warning(msg: str, **_kw: object) -> None:
        warnings.append(msg)

    monkeypatch.setattr(config.logger, "warning", fake_warning)
    ForkpointSettings(OPENAI_API_URL="https://api.example.com/v1/chat/completions")
    assert any("OPENAI_API_KEY" in msg for msg in warnings)


def test_provider_config_is_frozen():
    provider = ForkpointSettings(GEMINI_API_KEY="k").gemini_provider()
    with pytest.raises(ValidationError):
        provider.api_key = "other"


def test_gemini_endpoint_trailing_slash_removed():
    provider = ForkpointSettings(
        GEMINI_API_BASE="https://example.com/v1beta/"
    ).gemini_provider()
    assert provider.endpoint == "https://example.com/v1beta"


def test_is_local_endpoint():
    assert is_local_endpoint("http://127.0.0.1:8080/v1/chat/completions")
    assert is_local_endpoint("http://localhost/v1")
    assert not is_local_endpoint("https://localhost.example.com/v1")
    assert not is_local_endpoint("")


def test_log_level_alias(monkeypatch):
    monkeypatch.setenv("FORKPOINT_LOG_LEVEL", "DEBUG")
    assert ForkpointSettings().LOG_LEVEL_STR == "DEBUG"
