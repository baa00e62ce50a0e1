"""Tests for configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from openai_wire.config import Settings


def test_settings_loads_from_env(settings: Settings):
    """Test that settings loads values from environment variables."""
    assert settings.api_key == "test-api-key"
    assert settings.organization == "org-test"
    assert settings.base_url == "https://api.test/v1"
    assert settings.log_level == "DEBUG"


def test_settings_has_defaults(settings: Settings):
    """Test that settings has correct default values."""
    assert settings.timeout == 60.0
    assert settings.stream_data_prefix == "data:"
    assert settings.stream_done_token == "[DONE]"


def test_settings_has_logging_file_defaults(settings: Settings):
    """Test that file logging settings have correct defaults."""
    assert settings.log_file == ""
    assert settings.log_file_max_bytes == 10_485_760  # 10 MB
    assert settings.log_file_backup_count == 5


def test_settings_requires_api_key(tmp_path, monkeypatch):
    """OPENAI_API_KEY has no default."""
    monkeypatch.chdir(tmp_path)
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValidationError, match="OPENAI_API_KEY"):
            Settings()
