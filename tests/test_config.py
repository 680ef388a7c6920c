"""Tests for settings model and env aliases."""

import pytest

from structai import config
from structai.config import Settings
from structai.llm import DEFAULT_MODEL
from structai.orchestration import CallOptions


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path) -> None:
    """Keep local .env files and provider keys out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("ANTHROPIC_API_KEY", "LLM_API_KEY", "LLM_MODEL", "LLM_TEMPERATURE"):
        monkeypatch.delenv(name, raising=False)


def test_settings_reads_anthropic_api_key(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

    settings = Settings()

    assert settings.anthropic_api_key == "sk-test"
    assert settings.llm_model == DEFAULT_MODEL


def test_settings_supports_llm_api_key_alias(monkeypatch) -> None:
    """LLM_API_KEY should also populate the Anthropic key."""
    monkeypatch.setenv("LLM_API_KEY", "alias-key")

    settings = Settings()

    assert settings.anthropic_api_key == "alias-key"


def test_settings_requires_api_key() -> None:
    with pytest.raises(Exception):
        Settings()


def test_settings_rejects_out_of_range_temperature(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_TEMPERATURE", "1.5")

    with pytest.raises(Exception):
        Settings()


def test_call_options_from_settings(monkeypatch) -> None:
    """Configured defaults become explicit call options."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_MODEL", "claude-custom")

    options = Settings(llm_max_tokens=1000, llm_temperature=0.0).call_options()

    assert options == CallOptions(model="claude-custom", max_tokens=1000, temperature=0.0)


def test_get_settings_singleton(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "singleton-key")
    monkeypatch.setattr(config, "_settings", None)

    first = config.get_settings()

    assert first is config.get_settings()
    assert first.anthropic_api_key == "singleton-key"
