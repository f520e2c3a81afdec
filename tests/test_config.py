"""Tests for environment-driven settings."""
from __future__ import annotations

import pytest

from captionist.core.config import DEFAULT_HOOK_SYSTEM_INSTRUCTION, Settings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARK_API_KEY", "from-env")
    monkeypatch.setenv("ARK_TEXT_MODEL", "custom-vision-model")
    monkeypatch.setenv("ARK_RESPONSE_FORMAT", "json_object")

    settings = Settings()

    assert settings.ark_api_key == "from-env"
    assert settings.ark_text_model == "custom-vision-model"
    assert settings.ark_response_format == "json_object"
    assert settings.hook_system_instruction == DEFAULT_HOOK_SYSTEM_INSTRUCTION


def test_unknown_response_format_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARK_RESPONSE_FORMAT", "xml")

    with pytest.raises(ValueError):
        Settings()
